class FilmBrowserError(Exception):
    """Base exception for all film_browser errors"""
    pass


class ConfigError(FilmBrowserError):
    """Invalid or inconsistent global.json"""
    pass


class DataLoadError(FilmBrowserError):
    """
    The tabular source could not be read:
    missing file, unreadable encoding, unparseable delimited text
    """
    pass


class EmptyDomainError(FilmBrowserError, ValueError):
    """A scale was requested for a sequence with no finite values"""
    pass


class ReentrantDispatchError(FilmBrowserError, RuntimeError):
    """An event was dispatched while another event was still being processed"""
    pass
