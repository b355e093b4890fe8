"""Utility functions for bankit."""

from bankit.utils.date_parser import parse_date
from bankit.utils.amount_parser import parse_amount
from bankit.utils.password import hash_password, password_matches

__all__ = ["parse_date", "parse_amount", "hash_password", "password_matches"]
