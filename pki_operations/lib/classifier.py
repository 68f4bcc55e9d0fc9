"""Map failed easyrsa output onto typed errors.

easyrsa reports failures as free text, so classification depends on its exact
wording. All of that knowledge lives in RULES: an ordered list of
(predicate, error factory) pairs evaluated first-match-wins. Update the table
here when easyrsa changes its messages; callers only see typed errors.
"""

from collections.abc import Callable

from .errors import (
    BadCaPasswordError,
    CaAlreadyExistsError,
    CaNotFoundError,
    CertificateAlreadyExistsError,
    CertificateNotFoundError,
    EasyRSACommandError,
    EasyRSAError,
    PkiDirNotFoundError,
)
from .models import InvocationOutcome

Predicate = Callable[[InvocationOutcome], bool]
ErrorFactory = Callable[[], EasyRSAError]


def _stdout_has(*needles: str) -> Predicate:
    return lambda outcome: any(needle in outcome.stdout for needle in needles)


def _stderr_has_all(*needles: str) -> Predicate:
    return lambda outcome: all(needle in outcome.stderr for needle in needles)


RULES: list[tuple[Predicate, ErrorFactory]] = [
    (_stdout_has("already seem to have one set up"), CaAlreadyExistsError),
    (_stdout_has("PKI does not exist (perhaps you need to run init"), PkiDirNotFoundError),
    (_stderr_has_all("Could not read CA private key from", "wrong password"), BadCaPasswordError),
    (_stdout_has("Missing expected CA file"), lambda: CaNotFoundError("CA file not exists")),
    (_stdout_has("Conflicting certificate exists at"), CertificateAlreadyExistsError),
    (_stdout_has("no certificate was found", "Missing certificate file"), CertificateNotFoundError),
]


def classify(
    outcome: InvocationOutcome,
    rules: list[tuple[Predicate, ErrorFactory]] | None = None,
) -> EasyRSAError:
    """Return the error describing a failed invocation.

    Args:
        outcome: Captured output of an invocation that exited non-zero
        rules: Rule table to use instead of RULES

    Returns:
        The first matching typed error, or EasyRSACommandError carrying the raw stderr
    """
    for matches, make_error in RULES if rules is None else rules:
        if matches(outcome):
            return make_error()
    return EasyRSACommandError(outcome.stderr, stdout=outcome.stdout, returncode=outcome.returncode)
