class ReactorModelError(ValueError):
    """Base class for reactor model failures."""


class InvalidConfigurationError(ReactorModelError):
    """Feed ratio the closed-form solvers do not cover (NaOH in deficit)."""


class UnresolvedRootError(ReactorModelError):
    """Neither root of the CSTR balance is a physical conversion."""
