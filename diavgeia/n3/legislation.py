"""Links from considerations and decisions to legislation or earlier decisions."""

from __future__ import annotations

from diavgeia.models.entries import BodyEntry

DECISION_BASE = "http://diavgeia.gov.gr/eli/decision"
PRIOR_DECISION = "dvg"
CONSIDERS = "ont:considers"


def decision_iri(iun: object, version: object = "") -> str:
    """IRI of a decision document.

    References to other decisions leave the version segment empty: the form
    only knows the IUN, and an IUN may point at either a legacy PDF decision
    or a serialized one.
    """
    return f"{DECISION_BASE}/{iun}/{version}"


def has_legislation_linking(entry: BodyEntry) -> bool:
    if entry.legislation_type == PRIOR_DECISION:
        return bool(entry.iun)
    return bool(entry.legislation_type and entry.year and entry.number)


def format_linking(entry: BodyEntry) -> tuple[str, str]:
    """Return the ``(predicate, object)`` pair linking *entry* to what it cites.

    Slashes inside ``leg:`` local names are escaped, which is how the triple
    store's parser accepts them.
    """
    if entry.legislation_type == PRIOR_DECISION:
        return CONSIDERS, f"<{decision_iri(entry.iun)}>"

    article_paragraph = ""
    if entry.article:
        article_paragraph = f"\\/article\\/{entry.article}"
        if entry.paragraph:
            article_paragraph += f"\\/paragraph\\/{entry.paragraph}"
    return (
        CONSIDERS,
        f"leg:{entry.legislation_type}\\/{entry.year}\\/{entry.number}{article_paragraph}",
    )
