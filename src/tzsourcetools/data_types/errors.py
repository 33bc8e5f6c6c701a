# Copyright 2024 Brian T. Park
#
# MIT License

"""
Exceptions raised while extracting metadata from the TZ Database source files.
Every one of them is fatal for the snapshot being processed: the database is
either fully well-formed or unusable.
"""

from typing import Optional


class TzDataError(Exception):
    """Base class of all data-integrity errors found in the TZDB sources."""


class DuplicateDefinitionError(TzDataError):
    """A Zone or Link name (or a table key) is defined more than once."""

    def __init__(
        self,
        name: str,
        file_name: str = '',
        line_number: int = 0,
        message: Optional[str] = None,
    ):
        self.name = name
        self.file_name = file_name
        self.line_number = line_number
        if message is None:
            message = f"zone {name} multiply defined"
            if file_name:
                message += f" ({file_name}:{line_number})"
        super().__init__(message)


class CycleDetectedError(TzDataError):
    """A Link resolves back to itself through the chain of links."""

    def __init__(self, alias: str):
        self.alias = alias
        super().__init__(f"circular link at {alias}")


class DanglingLinkError(TzDataError):
    """The fully resolved target of a Link is not a Zone."""

    def __init__(self, alias: str, target: str):
        self.alias = alias
        self.target = target
        super().__init__(f"link from {alias} to non-existent zone {target}")


class MalformedLineError(TzDataError):
    """A line is neither a comment nor a recognized record."""

    def __init__(self, file_name: str, line_number: int, line: str):
        self.file_name = file_name
        self.line_number = line_number
        self.line = line
        super().__init__(
            f"bad line in {file_name}:{line_number}: {line!r}")


class UnknownCountryError(TzDataError):
    """A zone.tab row refers to a country code missing from iso3166.tab."""

    def __init__(self, country_code: str):
        self.country_code = country_code
        super().__init__(f"unknown country {country_code}")


class InvalidRegionGroupingError(TzDataError):
    """A country mixes the empty region description with non-empty ones."""

    def __init__(self, country_code: str):
        self.country_code = country_code
        super().__init__(f"bad region description in {country_code}")


class ZoneinfoMismatchError(TzDataError):
    """The compiled zoneinfo tree does not match the set of zone names."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"{reason} file {name}")


class InvalidVersionError(ValueError):
    """The TZDB version string is not of the form YYYYx (e.g. '2024a')."""

    def __init__(self, version: str):
        self.version = version
        super().__init__(f"malformed Olson version number '{version}'")
