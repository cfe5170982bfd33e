"""Test data factories for Callboard."""

from tests.factories.account_factory import AccountFactory, drive_link

__all__ = ["AccountFactory", "drive_link"]
