"""Tests for field extraction."""

from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Optional

import pytest
from pydantic import BaseModel, Field, SecretStr

from formgen.errors import NotARecordError
from formgen.extraction.extractor import MemberKind, extract, infer_type, schema_for
from formgen.extraction.tags import form_field


class Location(BaseModel):
    Street1: str = form_field("label=Street", default="")
    City: str = ""
    State: str = form_field("type=select", default="")


class Person(BaseModel):
    Name: str = ""
    Address: Optional[Location] = None


class Shipping(BaseModel):
    Street1: str = ""
    Country: str = "US"
    Express: bool = True


class Parcel(BaseModel):
    Weight: float = 0
    Destination: Optional[Shipping] = None


class Phone(BaseModel):
    Number: str = ""


class Contact(BaseModel):
    Name: str = ""
    Phones: list[Phone] = []
    Home: Location = Location()
    Note: str = form_field("type=textarea", default="")


class Color(str, Enum):
    RED = "red"
    BLUE = "blue"


class Kinds(BaseModel):
    title: str = ""
    active: bool = False
    count: int = 0
    price: float = 0.0
    amount: Decimal = Decimal("0")
    born: Optional[date] = None
    seen: Optional[datetime] = None
    day: Optional[datetime] = form_field("date", default=None)
    at: Optional[time] = None
    secret: Optional[SecretStr] = None
    tags: list[str] = []
    color: Color = Color.RED


class Account(BaseModel):
    internal_id: int = form_field("-", default=0)
    token: str = form_field("skip", default="")
    postal: str = Field("", alias="PostalCode")
    nickname: str = Field("", title="Known As", description="Optional")
    email: str = form_field(
        "label=E-mail;type=email;placeholder=you@example.com;footer=We never share it;"
        "attrs=required autofocus;id=contact-email;colour=blue",
        default="",
    )


class Node(BaseModel):
    Label: str = ""
    Child: Optional["Node"] = None


def names(fields):
    return [f.name for f in fields]


class TestExtractOrder:
    """Tests for extraction order and nesting."""

    def test_unset_nested_record_is_walked(self):
        """Test that an unset optional record still yields its leaves."""
        fields = extract(Person())
        assert names(fields) == ["Name", "Address.Street1", "Address.City", "Address.State"]
        assert all(f.value == "" for f in fields)

    def test_unset_nested_record_uses_defaults(self):
        """Test that leaves of an unset record carry its declared defaults."""
        values = {f.name: f.value for f in extract(Parcel())}
        assert values == {
            "Weight": "",
            "Destination.Street1": "",
            "Destination.Country": "US",
            "Destination.Express": "true",
        }

    def test_scenario_labels(self):
        """Test default and tagged labels."""
        fields = {f.name: f for f in extract(Person())}
        assert fields["Name"].label == "Name"
        assert fields["Address.Street1"].label == "Street"
        assert fields["Address.Street1"].placeholder == "Street1"

    def test_nested_values(self):
        """Test values read from a set nested record."""
        person = Person(Name="Ann", Address=Location(Street1="1 Main", City="Austin"))
        values = {f.name: f.value for f in extract(person)}
        assert values == {
            "Name": "Ann",
            "Address.Street1": "1 Main",
            "Address.City": "Austin",
            "Address.State": "",
        }

    def test_nested_leaves_are_contiguous(self):
        """Test depth-first order with list elements."""
        contact = Contact(Name="a", Phones=[Phone(Number="1"), Phone(Number="2")])
        assert names(extract(contact)) == [
            "Name",
            "Phones.0.Number",
            "Phones.1.Number",
            "Home.Street1",
            "Home.City",
            "Home.State",
            "Note",
        ]

    def test_empty_list_yields_nothing(self):
        """Test that an empty record list emits no fields."""
        assert "Phones.0.Number" not in names(extract(Contact()))

    def test_names_are_unique(self):
        """Test name uniqueness within one pass."""
        result = names(extract(Contact(Phones=[Phone(), Phone()])))
        assert len(result) == len(set(result))

    def test_recursive_model_stops_when_unset(self):
        """Test that an unset self-reference is not walked forever."""
        assert names(extract(Node(Label="a"))) == ["Label"]
        assert names(extract(Node(Label="a", Child=Node(Label="b")))) == ["Label", "Child.Label"]


class TestExtractLeaves:
    """Tests for leaf field contents."""

    def test_type_inference(self):
        """Test the default input type of each declared type."""
        types = {f.name: f.type for f in extract(Kinds())}
        assert types == {
            "title": "text",
            "active": "checkbox",
            "count": "number",
            "price": "number",
            "amount": "number",
            "born": "date",
            "seen": "datetime-local",
            "day": "date",
            "at": "time",
            "secret": "password",
            "tags": "text",
            "color": "text",
        }

    def test_values(self):
        """Test stringified values."""
        kinds = Kinds(
            title="Hi",
            active=True,
            count=3,
            price=2.5,
            born=date(1990, 1, 2),
            seen=datetime(2024, 5, 1, 13, 45, 30),
            day=datetime(2024, 5, 1, 13, 45),
            at=time(9, 30),
            secret=SecretStr("hunter2"),
            tags=["a", "b"],
            color=Color.BLUE,
        )
        values = {f.name: f.value for f in extract(kinds)}
        assert values["title"] == "Hi"
        assert values["active"] == "true"
        assert values["count"] == "3"
        assert values["price"] == "2.5"
        assert values["born"] == "1990-01-02"
        assert values["seen"] == "2024-05-01T13:45"
        assert values["day"] == "2024-05-01"
        assert values["at"] == "09:30"
        assert values["secret"] == ""
        assert values["tags"] == "a,b"
        assert values["color"] == "blue"

    def test_zero_values_are_empty(self):
        """Test that zero values render empty."""
        values = {f.name: f.value for f in extract(Kinds())}
        assert values["active"] == ""
        assert values["count"] == ""
        assert values["amount"] == ""
        assert values["color"] == "red"

    def test_tag_overrides(self):
        """Test every tag option on one member."""
        fields = {f.name: f for f in extract(Account())}
        email = fields["email"]
        assert email.label == "E-mail"
        assert email.type == "email"
        assert email.placeholder == "you@example.com"
        assert email.footer == "We never share it"
        assert email.attrs == "required autofocus"
        assert email.id == "contact-email"

    def test_omitted_members(self):
        """Test the '-' and skip markers."""
        assert names(extract(Account())) == ["PostalCode", "nickname", "email"]

    def test_alias_and_model_metadata(self):
        """Test alias names and pydantic title/description defaults."""
        fields = {f.name: f for f in extract(Account(PostalCode="78701"))}
        assert fields["PostalCode"].value == "78701"
        assert fields["PostalCode"].label == "Postal Code"
        assert fields["nickname"].label == "Known As"
        assert fields["nickname"].footer == "Optional"

    def test_default_id(self):
        """Test ids derived from names."""
        fields = {f.name: f for f in extract(Person())}
        assert fields["Address.Street1"].id == "Address_Street1"


class TestExtractContract:
    """Tests for extraction guarantees."""

    def test_not_a_record(self):
        """Test the fatal error for non-records."""
        with pytest.raises(NotARecordError):
            extract({"Name": "Ann"})
        with pytest.raises(TypeError):
            extract(Person)

    def test_idempotent(self):
        """Test that two passes agree."""
        person = Person(Name="Ann", Address=Location(City="Austin"))

        def key(fields):
            return [(f.name, f.type, f.value, f.label, f.placeholder) for f in fields]

        assert key(extract(person)) == key(extract(person))

    def test_record_not_mutated(self):
        """Test that extraction only reads the record."""
        person = Person(Name="Ann")
        before = person.model_dump()
        extract(person)
        assert person.model_dump() == before
        assert person.Address is None

    def test_fresh_fields_each_call(self):
        """Test that fields are not shared across calls."""
        first = extract(Person())
        first[0].errors.append("changed")
        assert extract(Person())[0].errors == []

    def test_constructed_record(self):
        """Test records built without validation."""
        person = Person.model_construct(Name="Ann", Address={"City": "Austin"})
        values = {f.name: f.value for f in extract(person)}
        assert values["Address.City"] == "Austin"
        assert values["Address.Street1"] == ""


class TestSchema:
    """Tests for the cached record schema."""

    def test_schema_is_cached(self):
        """Test that a schema is built once per class."""
        assert schema_for(Contact) is schema_for(Contact)

    def test_member_kinds(self):
        """Test member classification."""
        kinds = {m.name: m.kind for m in schema_for(Contact).members}
        assert kinds == {
            "Name": MemberKind.LEAF,
            "Phones": MemberKind.RECORD_LIST,
            "Home": MemberKind.RECORD,
            "Note": MemberKind.LEAF,
        }

    def test_omitted_members_kept_in_schema(self):
        """Test that opted-out members stay in the layout but not in the form."""
        schema = schema_for(Account)
        assert [m.attr for m in schema.members][:2] == ["internal_id", "token"]
        assert [m.attr for m in schema.visible] == ["postal", "nickname", "email"]

    def test_infer_type_unwraps_optional(self):
        """Test that Optional wrappers are ignored."""
        assert infer_type(Optional[int]) == "number"
        assert infer_type(bool | None) == "checkbox"
        assert infer_type(dict[str, str]) == "text"
