class DefinitionsLoadError(Exception):
    """The class definitions file is missing, unreadable or malformed."""

    pass


class HandledCommandError(Exception):
    """An error that has already been properly displayed to the user.
    The CLI should exit gracefully without showing a traceback."""

    pass
