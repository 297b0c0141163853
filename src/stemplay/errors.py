from __future__ import annotations


class StemplayError(Exception):
    """Base for errors raised at the package boundary (never by the parser core)."""


class SettingsError(StemplayError):
    pass


class BlueprintInputError(StemplayError):
    """Input that cannot be handed to the parser: not text, undecodable, too large."""
