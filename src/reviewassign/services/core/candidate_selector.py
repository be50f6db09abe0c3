"""Core service for choosing reviewers out of a candidate pool.

All randomness goes through one injected random.Random, so callers that need
reproducible picks (tests, audits) pass a seeded or fake generator.
"""

import logging
import random
from typing import Collection, List, Optional, Sequence

from reviewassign.domain.exceptions import NoCandidateError
from reviewassign.domain.models import User

logger = logging.getLogger(__name__)


class CandidateSelector:
    """Picks reviewer ids from already-filtered candidate users.

    Callers apply exclusions (author, current reviewers, inactive members)
    before calling; the selector only guarantees no duplicates and a uniform
    choice when it has to choose.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        """Initialize selector

        Args:
            rng: Random source (default: a fresh, OS-seeded random.Random)
        """
        self.rng = rng if rng is not None else random.Random()

    # Public API methods

    def pick_up_to(self, candidates: Sequence[User], limit: int) -> List[str]:
        """Choose at most `limit` distinct reviewer ids

        When the pool fits within the limit every candidate is returned in
        pool order and the random source is not used. Otherwise a uniformly
        random subset of size `limit` is drawn without replacement.

        Args:
            candidates: Eligible users (unique ids)
            limit: Maximum number of reviewers wanted

        Returns:
            List of min(limit, len(candidates)) user ids
        """
        if limit <= 0 or not candidates:
            return []

        if len(candidates) <= limit:
            return [user.user_id for user in candidates]

        positions = self.rng.sample(range(len(candidates)), limit)
        return [candidates[i].user_id for i in positions]

    def pick_one(self, candidates: Sequence[User]) -> str:
        """Choose a single reviewer id uniformly at random

        Args:
            candidates: Eligible users

        Returns:
            Chosen user id; a lone candidate is returned without drawing

        Raises:
            NoCandidateError: If there are no candidates
        """
        if not candidates:
            raise NoCandidateError("No active replacement candidate in team")

        if len(candidates) == 1:
            return candidates[0].user_id

        return candidates[self.rng.randrange(len(candidates))].user_id

    @staticmethod
    def first_fit(pool: Sequence[str], excluded: Collection[str]) -> Optional[str]:
        """Deterministic pick: the first pool id not in `excluded`

        Args:
            pool: Candidate ids in a stable order
            excluded: Ids that may not be chosen

        Returns:
            First eligible id, or None if the pool is exhausted
        """
        for user_id in pool:
            if user_id not in excluded:
                return user_id
        return None


_default_selector: Optional[CandidateSelector] = None
_default_seed: Optional[int] = None


def default_selector(seed: Optional[int] = None) -> CandidateSelector:
    """Process-wide selector shared by services that aren't given one

    The seed only takes effect on the first call. A later call with a
    different seed gets the existing selector and a logged warning.

    Args:
        seed: Seed applied when the shared selector is first created

    Returns:
        The shared CandidateSelector
    """
    global _default_selector, _default_seed
    if _default_selector is None:
        _default_selector = CandidateSelector(random.Random(seed))
        _default_seed = seed
    elif seed is not None and seed != _default_seed:
        logger.warning(
            f"Shared selector already seeded with {_default_seed}; ignoring seed {seed}"
        )
    return _default_selector
