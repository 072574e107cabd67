from blog_api.configs.settings import (
    CONFIG_MAP,
    DEFAULT_PAGE,
    DEFAULT_PAGE_LIMIT,
    MIN_PASSWORD_LENGTH,
    WORDS_PER_MINUTE,
    PasswordConfig,
    pool_kwargs,
    settings,
)

__all__ = [
    "CONFIG_MAP",
    "DEFAULT_PAGE",
    "DEFAULT_PAGE_LIMIT",
    "MIN_PASSWORD_LENGTH",
    "WORDS_PER_MINUTE",
    "PasswordConfig",
    "pool_kwargs",
    "settings",
]
