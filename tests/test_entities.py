from __future__ import annotations

import pytest

from core.domain.entities import EntityKind, kind_from_id, kind_from_name, kind_from_prefix
from core.domain.fields import QualifiedField, parse_fields
from core.errors import InvalidEntityKindError, InvalidFieldSpecError, ParseError


class TestEntityKind:
    @pytest.mark.parametrize(
        "prefix, kind",
        [
            ("001", EntityKind.ACCOUNT),
            ("02i", EntityKind.ASSET),
            ("003", EntityKind.CONTACT),
            ("006", EntityKind.OPPORTUNITY),
            ("00k", None),
            ("02I", None),
        ],
    )
    def test_kind_from_prefix(self, prefix, kind):
        assert kind_from_prefix(prefix) is kind

    def test_kind_from_id_requires_known_length(self):
        assert kind_from_id("0012500001Lhk3h") is EntityKind.ACCOUNT
        assert kind_from_id("0012500001Lhk3hAAB") is EntityKind.ACCOUNT
        assert kind_from_id("0012500001Lhk3hA") is None
        assert kind_from_id("001") is None

    def test_kind_from_name_round_trips(self):
        for kind in EntityKind:
            assert kind_from_name(str(kind)) is kind

    @pytest.mark.parametrize("name", ["account", "Lead", "", "Account "])
    def test_kind_from_name_rejects_unknown(self, name):
        with pytest.raises(InvalidEntityKindError) as exc_info:
            kind_from_name(name)

        assert exc_info.value.message == f'invalid entity "{name}"'

    def test_line_item_has_no_prefix(self):
        assert EntityKind.OPPORTUNITY_LINE_ITEM not in {
            kind_from_prefix(p) for p in ("001", "02i", "003", "006")
        }


class TestQualifiedField:
    def test_parse(self):
        field = QualifiedField.parse("Contact.Birthdate")

        assert field.kind is EntityKind.CONTACT
        assert field.name == "Birthdate"
        assert str(field) == "Contact.Birthdate"

    def test_every_kind_round_trips(self):
        for kind in EntityKind:
            spec = f"{kind}.Foo__c"
            assert str(QualifiedField.parse(spec)) == spec

    def test_kind_field_helper(self):
        assert EntityKind.ASSET.field("Id") == QualifiedField.parse("Asset.Id")

    @pytest.mark.parametrize("spec", ["Account", "Account.Name.Extra", "", "AccountName"])
    def test_wrong_number_of_parts(self, spec):
        with pytest.raises(InvalidFieldSpecError) as exc_info:
            QualifiedField.parse(spec)

        assert exc_info.value.message == f'invalid entity field "{spec}"'

    def test_unknown_kind(self):
        with pytest.raises(InvalidFieldSpecError) as exc_info:
            QualifiedField.parse("Lead.Email")

        assert exc_info.value.message == (
            'cannot parse entity field "Lead.Email": invalid entity "Lead"'
        )
        assert isinstance(exc_info.value.__cause__, InvalidEntityKindError)

    def test_bad_wolf(self):
        with pytest.raises(InvalidFieldSpecError, match='invalid entity field "BadWolf"'):
            QualifiedField.parse("BadWolf")
        with pytest.raises(InvalidFieldSpecError, match='invalid entity "Badwolf"'):
            QualifiedField.parse("Badwolf.Id")

    def test_parse_fields_keeps_order_and_duplicates(self):
        fields = parse_fields(["Account.Name", "Contact.Email", "Account.Name"])

        assert [str(f) for f in fields] == ["Account.Name", "Contact.Email", "Account.Name"]

    def test_parse_fields_fails_on_first_bad_entry(self):
        with pytest.raises(ParseError, match="Bad"):
            parse_fields(["Account.Name", "Bad.Field", "alsobad"])
