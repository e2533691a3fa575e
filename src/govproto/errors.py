"""
Exceptions raised by govproto.

Only programmer-facing APIs raise. Validation of external data returns a
ValidationResult instead (see govproto.results).
"""


class GovProtoError(Exception):
    """Base class for all govproto exceptions."""
    pass


class PageBuildError(GovProtoError, ValueError):
    """Raised when a builder is asked to construct a page that breaks a page type rule."""
    pass


class LogicError(GovProtoError, ValueError):
    """Raised when a JSONLogic expression cannot be evaluated."""
    pass


class ProjectIntegrityError(GovProtoError, ValueError):
    """Raised when a Project operation would break a project-wide invariant."""
    pass


class SchemaMigrationError(GovProtoError, ValueError):
    """Raised when raw project data cannot be brought to the current schema version."""
    pass
