"""Domain layer for bankit application.

Services are resolved lazily: the database layer imports
``bankit.domain.entities`` and must not pull the services in with it.
"""

_SERVICES = {
    "AccountService": "bankit.domain.account",
    "BalanceService": "bankit.domain.balance",
    "LockoutService": "bankit.domain.lockout",
    "TransactionService": "bankit.domain.transaction",
    "AccountLockRegistry": "bankit.domain.locks",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
