"""
Code generation.

Codes are drawn from a cryptographically secure source. Uniqueness is
enforced by the caller against the code table, not here.
"""

import secrets
import string

from wil_api.modules.codes.models import CodeKind

HEX_ALPHABET = "0123456789ABCDEF"
BASE36_ALPHABET = string.digits + string.ascii_uppercase


class CodeGenerator:
    """Produces random fixed-length codes over an alphabet."""

    def __init__(self, alphabet: str, length: int):
        self.alphabet = alphabet
        self.length = length

    def __call__(self) -> str:
        return "".join(secrets.choice(self.alphabet) for _ in range(self.length))


GENERATORS: dict[CodeKind, CodeGenerator] = {
    CodeKind.SIGNUP: CodeGenerator(HEX_ALPHABET, 8),
    CodeKind.STAFF: CodeGenerator(BASE36_ALPHABET, 6),
    CodeKind.EVENT: CodeGenerator(BASE36_ALPHABET, 6),
}


def mask_code(code: str) -> str:
    """Mask a code for logging, keeping the first two characters."""
    return code[:2] + "*" * max(len(code) - 2, 0)
