__all__ = [
    "decode_access_token",
    "get_current_user",
    "require_admin",
    "oauth2_scheme",
]


def __getattr__(name):
    if name in __all__:
        from . import security as _security
        return getattr(_security, name)
    raise AttributeError(f"module 'cityfix.utils' has no attribute '{name}'")
