"""
Codes Module

One-time codes for the WIL system:
- Signup codes (8 hex chars) issued when an application is accepted
- Staff codes (6 base36 chars) for staff and mentor registration
- Event codes (6 base36 chars) letting a guest create a lecture

Plus the signup blocklist. Redemption is handled by the accounts and events
modules, which consume codes inside their own transactions.
"""

from .router import router

__all__ = ["router"]
