"""
Invitation secrets.

Tokens go into links and carry full entropy; codes are short enough to read
out loud and are always upper-case hex. Password setup tokens for directly
added members are link tokens as well.
"""

import secrets


def new_invitation_token() -> str:
    return secrets.token_urlsafe(32)


def new_invitation_code() -> str:
    return secrets.token_hex(4).upper()


def new_setup_token() -> str:
    return secrets.token_urlsafe(32)


def normalize_email(email: str) -> str:
    return email.strip().lower()
