__all__ = ("CacheHeaderError", "InvalidDirective", "ConflictingDirective")


class CacheHeaderError(Exception): ...


class InvalidDirective(CacheHeaderError, ValueError): ...


class ConflictingDirective(CacheHeaderError, ValueError): ...
