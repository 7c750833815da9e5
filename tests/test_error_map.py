"""Tests for mapping Telivy error payloads onto form fields."""

import pytest
from scan_intake.services.error_map import map_vendor_errors


def test_maps_errors_container_with_list_messages():
  assert map_vendor_errors({"errors": {"work_email": ["Invalid"]}}) == {
      "workEmail": "Invalid"
  }


def test_maps_error_container_with_string_messages():
  assert map_vendor_errors({"error": {"company_name": "Required"}}) == {
      "companyName": "Required"
  }


def test_uses_first_list_element_only():
  payload = {
      "errors": {
          "work_email": ["Bad", "Worse"],
          "company_domain": ["Not resolvable"],
      }
  }

  assert map_vendor_errors(payload) == {
      "workEmail": "Bad",
      "companyDomain": "Not resolvable",
  }


@pytest.mark.parametrize("payload", ["weird", None, 42, [], ["errors"], True])
def test_non_object_payload_yields_empty_mapping(payload):
  assert map_vendor_errors(payload) == {}


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"errors": "Something broke"},
        {"error": ["work_email is invalid"]},
        {"detail": None},
        {"message": ""},
        {"errors": {}},
    ],
)
def test_ineligible_containers_are_skipped(payload):
  assert map_vendor_errors(payload) == {}


def test_translates_every_known_key():
  payload = {
      "errors": {
          "company_name": "a",
          "work_email": "b",
          "company_domain": "c",
          "full_name": "d",
          "phone": "e",
      }
  }

  assert map_vendor_errors(payload) == {
      "companyName": "a",
      "workEmail": "b",
      "companyDomain": "c",
      "fullName": "d",
      "phone": "e",
  }


def test_fallback_aliases():
  payload = {"detail": {"email": "x", "domain": "y", "name": "z"}}

  assert map_vendor_errors(payload) == {
      "workEmail": "x",
      "companyDomain": "y",
      "companyName": "z",
  }


def test_unknown_keys_are_ignored():
  payload = {"errors": {"vat_number": ["Bad"], "phone": ["Too short"]}}

  assert map_vendor_errors(payload) == {"phone": "Too short"}


def test_object_with_message_field():
  payload = {"errors": {"full_name": {"message": "Too long", "code": 7}}}

  assert map_vendor_errors(payload) == {"fullName": "Too long"}


def test_non_string_messages_are_stringified():
  payload = {"errors": {"phone": [12345], "full_name": {"message": 400}}}

  assert map_vendor_errors(payload) == {"phone": "12345", "fullName": "400"}


@pytest.mark.parametrize(
    "value",
    [[], None, 17, False, {"code": "x"}, {"message": ""}, {"message": []},
     {"message": {}}],
)
def test_unusable_values_are_skipped(value):
  assert map_vendor_errors({"errors": {"phone": value}}) == {}


def test_later_containers_overwrite_earlier_ones():
  payload = {
      "errors": {"work_email": ["from errors"], "phone": ["kept"]},
      "error": {"work_email": "from error"},
      "detail": {"work_email": {"message": "from detail"}},
      "message": {"email": ["from message"]},
  }

  assert map_vendor_errors(payload) == {
      "workEmail": "from message",
      "phone": "kept",
  }


def test_alias_and_direct_key_in_one_container_keep_last_seen():
  payload = {"errors": {"work_email": ["direct"], "email": ["alias"]}}

  assert map_vendor_errors(payload) == {"workEmail": "alias"}
