"""Test fixtures for the transferobject test suite."""

from .records import (
    Contact,
    Employee,
    Invoice,
    Measurement,
    Money,
    Point,
    Team,
    Types,
    User,
    make_contact,
)

__all__ = [
    'Contact',
    'Employee',
    'Invoice',
    'Measurement',
    'Money',
    'Point',
    'Team',
    'Types',
    'User',
    'make_contact',
]
