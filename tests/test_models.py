"""
Tests for record wire shapes.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from circonus_api.models import Annotation, MaintenanceWindow, User, UserContactInfo


class TestMaintenanceWindow:

    def test_empty_window_encodes_to_empty_object(self):
        assert MaintenanceWindow().to_wire() == {}

    def test_wire_names(self):
        window = MaintenanceWindow.model_validate({
            "_cid": "/maintenance/12",
            "item": "/check_bundle/3",
            "notes": "db upgrade",
            "type": "check",
            "tags": ["env:prod"],
            "severities": ["1", "2"],
            "start": 1700000000,
            "stop": 1700003600,
        })
        assert window.cid == "/maintenance/12"
        assert window.to_wire() == {
            "_cid": "/maintenance/12",
            "item": "/check_bundle/3",
            "notes": "db upgrade",
            "type": "check",
            "tags": ["env:prod"],
            "severities": ["1", "2"],
            "start": 1700000000,
            "stop": 1700003600,
        }

    def test_severities_from_csv(self):
        window = MaintenanceWindow.model_validate({"severities": "1,2, 3"})
        assert window.severities == ["1", "2", "3"]
        assert window.to_wire()["severities"] == ["1", "2", "3"]

    def test_severities_from_numbers(self):
        window = MaintenanceWindow.model_validate({"severities": [1, 5]})
        assert window.severities == ["1", "5"]

    def test_severities_order_preserved(self):
        window = MaintenanceWindow(severities="5,1,3")
        assert window.severities == ["5", "1", "3"]

    def test_nulls_fall_back_to_defaults(self):
        window = MaintenanceWindow.model_validate({"tags": None, "notes": None, "severities": None})
        assert window.tags == []
        assert window.notes == ""
        assert window.severities == []

    def test_negative_timestamp_rejected(self):
        with pytest.raises(PydanticValidationError):
            MaintenanceWindow(start=-1)

    def test_unknown_keys_ignored(self):
        window = MaintenanceWindow.model_validate({"item": "/host/1", "_account": "/account/1"})
        assert window.to_wire() == {"item": "/host/1"}


class TestAnnotation:

    def test_required_keys_always_sent(self):
        assert Annotation().to_wire() == {
            "category": "",
            "title": "",
            "description": "",
            "rel_metrics": [],
            "start": 0,
            "stop": 0,
        }

    def test_server_fields(self):
        annotation = Annotation.model_validate({
            "_cid": "/annotation/5",
            "_created": 1700000000,
            "_last_modified": 1700000100,
            "_last_modified_by": "/user/2",
            "category": "deploy",
            "title": "v1.2",
            "description": "release",
            "rel_metrics": ["1234_cpu"],
            "start": 1700000000,
            "stop": 1700000060,
        })
        assert annotation.created == 1700000000
        assert annotation.last_modified_by == "/user/2"
        wire = annotation.to_wire()
        assert wire["_created"] == 1700000000
        assert wire["_last_modified"] == 1700000100
        assert wire["_last_modified_by"] == "/user/2"
        assert wire["rel_metrics"] == ["1234_cpu"]

    def test_populate_by_attribute_name(self):
        annotation = Annotation(cid="/annotation/1", created=10, title="t")
        assert annotation.to_wire()["_cid"] == "/annotation/1"
        assert annotation.to_wire()["_created"] == 10


class TestUser:

    def test_contact_info_always_an_object(self):
        assert User().to_wire() == {
            "contact_info": {},
            "email": "",
            "firstname": "",
            "lastname": "",
        }

    def test_contact_info_omits_empty_fields(self):
        user = User(contact_info=UserContactInfo(sms="+15550100"), email="a@example.com")
        assert user.to_wire()["contact_info"] == {"sms": "+15550100"}

    def test_decode(self):
        user = User.model_validate({
            "_cid": "/user/7",
            "contact_info": {"sms": "", "xmpp": "a@jabber.example.com"},
            "email": "a@example.com",
            "firstname": "Ada",
            "lastname": "Lovelace",
        })
        assert user.cid == "/user/7"
        assert user.contact_info.xmpp == "a@jabber.example.com"

    def test_null_contact_info(self):
        user = User.model_validate({"contact_info": None, "email": "a@example.com"})
        assert user.contact_info == UserContactInfo()
