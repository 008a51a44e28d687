"""Exception types raised by the scoreboard."""


class ScoreboardError(Exception):
    """Base class for all scoreboard errors."""


class ConfigurationError(ScoreboardError):
    """Invalid command line input or no repository to scan.

    Fatal: the CLI reports it and exits with status 1.
    """


class FetchError(ScoreboardError):
    """A GitHub request failed (network, auth, rate limit or API error)."""


class ParseError(ScoreboardError, ValueError):
    """A fetched record has a malformed timestamp or a missing field."""
