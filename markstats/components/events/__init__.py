"""
Event components: client-side navigation notifications from the host page.
"""

from .navigation_channel_comp import NavigationChannel

__all__ = ["NavigationChannel"]
