# peoplenrich/services/enrichment/pipeline.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Sequence

from peoplenrich.common.logging import get_logger
from peoplenrich.domain.entities.person import Enrichment, PersonDraft
from peoplenrich.domain.enums.attribute_kind import AttributeKind
from peoplenrich.domain.errors import EnrichmentFailed, PeopleError
from peoplenrich.domain.ports.lookup import AttributeLookupPort, LookupValue

logger = get_logger(__name__)


@dataclass(frozen=True)
class LookupStep:
    attribute: AttributeKind
    run: Callable[[str], LookupValue]


def default_steps(lookup: AttributeLookupPort) -> list[LookupStep]:
    """age -> gender -> nationality, one lookup each."""
    return [
        LookupStep(kind, lambda name, kind=kind: lookup.fetch(kind, name))
        for kind in (AttributeKind.age, AttributeKind.gender, AttributeKind.nationality)
    ]


class EnrichmentPipeline:
    """
    Runs the lookup steps in order against one name and stops at the first failure.

    Either every step answers and the results are merged into the draft, or
    EnrichmentFailed names the attribute that broke and nothing is merged.
    Steps run sequentially; there is no retry.
    """

    def __init__(self, lookup: AttributeLookupPort, steps: Sequence[LookupStep] | None = None):
        self.steps = list(steps) if steps is not None else default_steps(lookup)

    def enrich(self, name: str) -> Enrichment:
        results: Dict[AttributeKind, LookupValue] = {}
        for step in self.steps:
            logger.debug("enrichment step %s for name=%s", step.attribute, name)
            try:
                results[step.attribute] = step.run(name)
            except PeopleError as e:
                logger.warning("enrichment aborted at %s: %s", step.attribute, e)
                raise EnrichmentFailed(step.attribute, e) from e
        return Enrichment(
            age=results.get(AttributeKind.age),  # type: ignore[arg-type]
            gender=results.get(AttributeKind.gender),  # type: ignore[arg-type]
            nationality=results.get(AttributeKind.nationality),  # type: ignore[arg-type]
        )

    def apply(self, draft: PersonDraft) -> PersonDraft:
        return self.enrich(draft.name).merge_into(draft)
