"""Authorization rules for blogs."""

from blog_api.auth.permissions import can_mutate, can_view, ensure_can_mutate, ensure_can_view

__all__ = ["can_mutate", "can_view", "ensure_can_mutate", "ensure_can_view"]
