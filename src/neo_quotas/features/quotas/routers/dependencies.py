"""Quota router dependencies.

These are placeholder functions that services override through
``app.dependency_overrides`` to provide configured services and their own
authorization checks. The quota core never authorizes callers itself.
"""


def get_quota_guard():
    """Placeholder for quota guard dependency.

    Services should override this to provide a configured QuotaGuard.
    """
    raise NotImplementedError(
        "Services must provide their own quota guard dependency"
    )


def get_limit_store():
    """Placeholder for quota limit store dependency.

    Services should override this to provide a configured QuotaLimitStore.
    """
    raise NotImplementedError(
        "Services must provide their own quota limit store dependency"
    )


def require_quota_reader():
    """Placeholder for the read authorization check.

    Services should override this with a dependency that raises when the
    caller may not read the organization's quotas.
    """
    raise NotImplementedError(
        "Services must provide their own quota reader authorization dependency"
    )


def require_quota_admin():
    """Placeholder for the administrative authorization check.

    Services should override this with a dependency that raises when the
    caller may not change quota limits.
    """
    raise NotImplementedError(
        "Services must provide their own quota admin authorization dependency"
    )
