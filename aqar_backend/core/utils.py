"""Common utilities for the Aqar backend."""

from datetime import date

from pydantic.alias_generators import to_camel, to_snake


def iso_day(value: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return value.isoformat()


def add_years(value: date, years: int) -> date:
    """Shift a date by whole years; Feb 29 rolls over to Mar 1."""
    try:
        return value.replace(year=value.year + years)
    except ValueError:
        return value.replace(year=value.year + years, month=3, day=1)


def snake_keys(data: dict) -> dict:
    """Convert camelCase wire keys to snake_case attribute names."""
    return {to_snake(key): value for key, value in data.items()}


def camel_keys(data: dict) -> dict:
    """Convert snake_case attribute names to camelCase wire keys."""
    return {to_camel(key): value for key, value in data.items()}
