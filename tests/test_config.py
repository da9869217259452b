"""
Settings, logging and model serialization tests
"""
import json

import pytest
from pydantic import ValidationError

from naming.config.settings import NamingSettings, get_settings
from naming.logging.config import configure_logging, get_logger
from naming.models import BeatInfo, Instance, ServiceListView


def test_settings_defaults():
    settings = NamingSettings(_env_file=None)

    assert settings.DEFAULT_SERVER_PORT == 8848
    assert settings.CONTEXT_PATH == "/nacos/v1/ns"
    assert settings.REQUEST_DOMAIN_RETRY_COUNT == 3
    assert settings.ENCODING == "UTF-8"


def test_server_list_parsing():
    settings = NamingSettings(SERVER_ADDR=" a:1 ,b:2,, ")

    assert settings.server_list == ["a:1", "b:2"]


@pytest.mark.parametrize("field,value", [
    ("HTTP_REQ_TIMEOUT", 0),
    ("REQUEST_DOMAIN_RETRY_COUNT", -1),
    ("HB_FAIL_WAIT_TIME", -5),
])
def test_settings_validation(field, value):
    with pytest.raises(ValidationError):
        NamingSettings(**{field: value})


def test_context_path_normalized():
    assert NamingSettings(CONTEXT_PATH="nacos/v1/ns/").CONTEXT_PATH == "/nacos/v1/ns"


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("NAMESPACE", "env-ns")
    monkeypatch.setenv("HB_FAIL_WAIT_TIME", "12345")

    settings = NamingSettings()

    assert settings.NAMESPACE == "env-ns"
    assert settings.HB_FAIL_WAIT_TIME == 12345


def test_settings_caching():
    assert get_settings() is get_settings()


def test_configure_logging():
    configure_logging(log_level="DEBUG", json_format=True)

    logger = get_logger("test")
    logger.info("configured", key="value")


def test_beat_info_json_uses_camel_case():
    beat = BeatInfo(service_name="g@@orders", ip="1.1.1.1", port=80, metadata={"k": "v"})

    payload = json.loads(beat.to_json())

    assert payload["serviceName"] == "g@@orders"
    assert payload["cluster"] == "DEFAULT"
    assert payload["metadata"] == {"k": "v"}
    assert payload["period"] == 5000


def test_instance_metadata_json():
    instance = Instance(ip="1.1.1.1", port=80, metadata={"zone": "a", "env": "prod"})

    assert json.loads(instance.metadata_json()) == {"zone": "a", "env": "prod"}
    assert Instance(ip="1.1.1.1", port=80).metadata_json() == "{}"


def test_instance_port_range():
    with pytest.raises(ValidationError):
        Instance(ip="1.1.1.1", port=70000)


def test_service_list_view_from_json():
    view = ServiceListView.from_json('{"count": 3, "doms": ["a", "b", "c"]}')

    assert view.count == 3
    assert view.data == ["a", "b", "c"]
    assert ServiceListView.from_json("null") == ServiceListView()
