"""
Join-code generation for play sessions.

Codes look like ``PCKL-7B2Q``: two groups of four symbols from an alphabet
without the look-alike characters 0/O and 1/I. 32 symbols over 8 positions
gives 32**8 (about 1.1 trillion) codes, so collisions are rare; the attempt
limit only guards against a broken random source or store.
"""
import logging
import secrets
from typing import Callable, Optional
from courtside.core.config import settings
from courtside.core.errors import ExhaustionError

logger = logging.getLogger(__name__)

CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
CODE_GROUP_LENGTH = 4
CODE_SEPARATOR = "-"
CODE_LENGTH = CODE_GROUP_LENGTH * 2 + len(CODE_SEPARATOR)


def generate_code(alphabet: str = CODE_ALPHABET) -> str:
    """Build one random code using a cryptographically secure source per symbol."""
    groups = [
        "".join(secrets.choice(alphabet) for _ in range(CODE_GROUP_LENGTH))
        for _ in range(2)
    ]
    return CODE_SEPARATOR.join(groups)


def generate_unique_code(
    exists: Callable[[str], bool],
    max_attempts: Optional[int] = None,
    alphabet: str = CODE_ALPHABET,
) -> str:
    """
    Generate a code that ``exists`` reports as unused.

    The check does not reserve the code: a concurrent caller can pick the same
    one before either is stored, so the insert must still handle a unique
    constraint violation.

    Raises:
        ExhaustionError: if ``max_attempts`` candidates all collided
    """
    if max_attempts is None:
        max_attempts = settings.SESSION_CODE_MAX_ATTEMPTS

    for attempt in range(1, max_attempts + 1):
        code = generate_code(alphabet)
        if not exists(code):
            return code
        logger.warning(f"Join code collision on attempt {attempt}/{max_attempts}")

    logger.error(f"Could not generate a unique join code after {max_attempts} attempts")
    raise ExhaustionError("Could not generate a unique code")
