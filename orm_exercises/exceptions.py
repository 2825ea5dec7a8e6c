class ExerciseError(Exception):
    pass


class ConnectionFailed(ExerciseError):
    pass


class RecordMappingError(ExerciseError):
    """
    Raised when a result row cannot be turned into the requested record type.
    """


class UnknownColumn(ExerciseError):
    pass
