"""
Unit tests for schema building from record annotations.
"""

import os
import sys
from datetime import datetime
from typing import Any, List, Optional, Tuple

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from fixtures.records import Contact, Employee, Team, Types, User

from transferobject import DeclaredType, Record, SchemaDefinitionError, field


def test_contact_schema():
    schema = Contact.schema()

    assert schema.names == ('name', 'company', 'email', 'age', 'unsubscribed')
    assert schema.get('age').declared_type is DeclaredType.INTEGER
    assert schema.get('name').required is True
    assert schema.get('unsubscribed').required is False
    assert schema.get('unsubscribed').default is False


def test_private_and_class_fields_excluded():
    assert '_should_not_show' not in Contact.schema()
    assert 'foo' not in Employee.schema()


def test_self_referencing_schema():
    schema = Employee.schema()

    reports_to = schema.get('reports_to')
    assert reports_to.declared_type is DeclaredType.RECORD
    assert reports_to.record_type is Employee
    assert reports_to.nullable is True
    assert reports_to.required is True

    subordinates = schema.get('subordinates')
    assert subordinates.declared_type is DeclaredType.RECORD_ARRAY
    assert subordinates.record_type is Employee
    assert subordinates.make_default() == []


def test_element_type_and_alias():
    schema = Team.schema()

    members = schema.get('members')
    assert members.declared_type is DeclaredType.RECORD_ARRAY
    assert members.record_type is Employee

    team_lead = schema.get('team_lead')
    assert team_lead.key == 'teamLead'
    assert schema.lookup('teamLead') is team_lead
    assert schema.lookup('team_lead') is team_lead


def test_scalar_types():
    schema = Types.schema()

    assert [d.declared_type for d in schema] == [
        DeclaredType.STRING,
        DeclaredType.BOOLEAN,
        DeclaredType.INTEGER,
        DeclaredType.FLOAT,
        DeclaredType.ARRAY,
        DeclaredType.STRING,
    ]
    assert schema.get('nothing').nullable is True
    assert all(d.declared_type.is_scalar for d in schema)


def test_opaque_types():
    schema = User.schema()
    assert schema.get('timestamp').declared_type is DeclaredType.OPAQUE
    assert not DeclaredType.OPAQUE.is_scalar


def test_schema_is_cached():
    assert Contact.schema() is Contact.schema()


def test_subclass_inherits_fields_first():
    class Manager(Employee):
        budget: float = 0.0

    schema = Manager.schema()

    assert schema.names[-1] == 'budget'
    assert schema.names[:2] == ('name', 'email')
    assert Employee.schema() is not schema


def test_generic_containers():
    class Bag(Record):
        tags: List[str]
        pair: Tuple[Employee, ...]
        anything: Any
        when: Optional[datetime] = None

    schema = Bag.schema()

    assert schema.get('tags').declared_type is DeclaredType.ARRAY
    assert schema.get('pair').declared_type is DeclaredType.RECORD_ARRAY
    assert schema.get('anything').declared_type is DeclaredType.OPAQUE
    assert schema.get('when').declared_type is DeclaredType.OPAQUE


def test_element_type_on_non_list_field():
    class Broken(Record):
        lead: str = field(element_type=Employee)

    with pytest.raises(SchemaDefinitionError) as exc_info:
        Broken.schema()

    assert exc_info.value.field_name == 'lead'


def test_element_type_must_be_record():
    class Broken(Record):
        members: list = field(element_type=int)

    with pytest.raises(SchemaDefinitionError):
        Broken.schema()


def test_duplicate_wire_key():
    class Clash(Record):
        name: str
        title: str = field(alias='name', default='')

    with pytest.raises(SchemaDefinitionError):
        Clash.schema()


def test_unresolvable_annotation():
    class Dangling(Record):
        parent: 'Nowhere'  # noqa: F821

    with pytest.raises(SchemaDefinitionError):
        Dangling.schema()


def test_field_default_and_factory_conflict():
    with pytest.raises(SchemaDefinitionError):
        field(default=[], default_factory=list)


@pytest.mark.parametrize('name', ['schema', 'copy', 'flatten', 'serialize', 'initialize', 'to_dict'])
def test_field_may_not_shadow_record_method(name):
    Shadow = type('Shadow', (Record,), {'__annotations__': {name: str, 'title': str}})

    with pytest.raises(SchemaDefinitionError) as exc_info:
        Shadow.schema()

    assert exc_info.value.field_name == name


def test_defaults_inherited_from_parent_record():
    class Memo(Record):
        title: str
        body: str = 'empty'

    class Note(Memo):
        pass

    schema = Note.schema()

    assert schema.get('title').required is True
    assert schema.get('body').default == 'empty'


def test_python_type_recorded():
    schema = User.schema()

    assert schema.get('timestamp').python_type is datetime
    assert schema.get('name').python_type is None
    assert Types.schema().get('items').python_type is list

    class Pair(Record):
        values: Tuple[int, int]

    assert Pair.schema().get('values').python_type is tuple


def test_any_has_no_python_type():
    class Loose(Record):
        anything: Any

    assert Loose.schema().get('anything').python_type is None
    assert Loose.from_map({'anything': '2021-03-14'}).anything == '2021-03-14'
