"""Unit tests for the stateless share endpoints."""

import pytest
from fastapi.testclient import TestClient

from api.app import create_application
from api.app_state import PinmapAppState
from core.schema.system_config_schema import ShareConfig, SystemConfig
from core.schema.preset_schema import PinMapping
from core.util.preset_codec import encode


@pytest.fixture
def test_client():
    config = SystemConfig(SHARE=ShareConfig(BASE_URL="https://pins.example/?lang=en"))
    return TestClient(create_application(state=PinmapAppState(system_config=config)))


@pytest.fixture
def configuration(esc_connector, fc_connector):
    return {
        "escConnector": esc_connector.to_wire(),
        "fcConnector": fc_connector.to_wire(),
        "mappings": [{"escPin": 1, "fcPin": 11}],
    }


class TestEncodeEndpoint:

    def test_encode_returns_url_safe_string(self, test_client, configuration):
        response = test_client.post("/api/share/encode", json=configuration)

        assert response.status_code == 200
        data = response.json()
        assert data["url"] == f"https://pins.example/?lang=en&s={data['encoded']}"
        assert set(data["encoded"]) <= set("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_")

    def test_encode_accepts_snake_case_keys(self, test_client, esc_connector, fc_connector):
        body = {"esc_connector": esc_connector.to_wire(), "fc_connector": fc_connector.to_wire()}

        response = test_client.post("/api/share/encode", json=body)

        assert response.status_code == 200


class TestDecodeEndpoint:

    def test_decode_returns_configuration(self, test_client, esc_connector, fc_connector):
        encoded = encode(esc_connector, fc_connector, [PinMapping(esc_pin=1, fc_pin=11)])

        response = test_client.get("/api/share/decode", params={"s": encoded})

        assert response.status_code == 200
        data = response.json()
        assert data["version"] == 1
        assert data["esc_connector"]["name"] == "Tekko32"
        assert data["mappings"] == [{"escPin": 1, "fcPin": 11}]

    @pytest.mark.parametrize("value", ["garbage", "a+b/c=", "eJzLSM3JyQcABiwCFQ"])
    def test_undecodable_string_returns_400(self, test_client, value):
        response = test_client.get("/api/share/decode", params={"s": value})

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid or unsupported share string"

    def test_missing_parameter_returns_422(self, test_client):
        response = test_client.get("/api/share/decode")

        assert response.status_code == 422
