"""Tests for comparison pair selection."""

import random
from collections import Counter

import pytest

from value_hierarchy.core.errors import InsufficientRecordsError
from value_hierarchy.models import ValueRecord
from value_hierarchy.ranking.selection import candidate_pool, select_pairs


def make_records(*counts: int) -> list[ValueRecord]:
    return [
        ValueRecord(id=f"v{i}", title=f"Value {i}", comparison_count=count)
        for i, count in enumerate(counts)
    ]


def paired_ids(pairs) -> list[str]:
    return [r.id for pair in pairs for r in pair]


class TestCandidatePool:
    """Tests for candidate pool determination."""

    def test_least_compared_cohort_when_large_enough(self):
        """Test pool is the min-count cohort when it can fill n pairs."""
        records = make_records(0, 2, 0, 1, 0, 0)
        pool = candidate_pool(records, n=2)

        assert [r.id for r in pool] == ["v0", "v2", "v4", "v5"]

    def test_pool_extends_to_lowest_counts(self):
        """Test small cohort is widened to the 2n least-compared values."""
        records = make_records(2, 0, 1, 5, 1, 0)
        pool = candidate_pool(records, n=2)

        assert [r.id for r in pool] == ["v1", "v5", "v2", "v4"]

    def test_extension_ties_keep_input_order(self):
        """Test ties on comparison count are broken by input order."""
        records = make_records(1, 0, 1, 1, 1)
        pool = candidate_pool(records, n=2)

        assert [r.id for r in pool] == ["v1", "v0", "v2", "v3"]

    def test_full_pool_once_coverage_reached(self):
        """Test every value is eligible once all reach the threshold."""
        records = make_records(3, 7, 4, 3)
        pool = candidate_pool(records, n=1)

        assert pool == records

    def test_custom_threshold(self):
        """Test coverage threshold is configurable."""
        records = make_records(1, 1, 5)
        assert len(candidate_pool(records, n=1, coverage_threshold=1)) == 3
        assert len(candidate_pool(records, n=1, coverage_threshold=2)) == 2

    def test_does_not_reorder_input(self):
        """Test the caller's list is left untouched."""
        records = make_records(2, 0, 1)
        before = list(records)
        candidate_pool(records, n=5)
        assert records == before


class TestSelectPairs:
    """Tests for the pair selector."""

    def test_ten_fresh_values_five_pairs(self):
        """Test n=5 on 10 uncompared values covers every value exactly once."""
        records = make_records(*([0] * 10))
        pairs = select_pairs(records, 5, random.Random(1))

        assert len(pairs) == 5
        ids = paired_ids(pairs)
        assert sorted(ids) == sorted(r.id for r in records)

    @pytest.mark.parametrize("n", [1, 2, 5, 50])
    def test_two_values_always_one_pair(self, n):
        """Test exactly two values yield exactly one pair regardless of n."""
        records = make_records(0, 4)
        pairs = select_pairs(records, n, random.Random(7))

        assert len(pairs) == 1
        assert {r.id for r in pairs[0]} == {"v0", "v1"}

    def test_pairs_are_disjoint(self):
        """Test no value appears in two pairs of the same call."""
        rng = random.Random(3)
        for _ in range(50):
            counts = [rng.randint(0, 6) for _ in range(rng.randint(2, 15))]
            records = make_records(*counts)
            pairs = select_pairs(records, rng.randint(1, 8), rng)

            ids = paired_ids(pairs)
            assert len(ids) == len(set(ids))
            for a, b in pairs:
                assert a is not b

    def test_pairs_come_from_low_count_cohort(self):
        """Test pairs stay within the extended cohort while coverage is low."""
        records = make_records(0, 0, 1, 1, 2, 5, 9)
        pairs = select_pairs(records, 2, random.Random(11))

        assert len(pairs) == 2
        assert set(paired_ids(pairs)) == {"v0", "v1", "v2", "v3"}

    def test_single_pair_from_min_cohort(self):
        """Test n=1 pairs the two least-compared values."""
        records = make_records(4, 0, 2, 0, 1)
        pairs = select_pairs(records, 1, random.Random(5))

        assert {r.id for r in pairs[0]} == {"v1", "v3"}

    def test_full_pool_includes_heavily_compared(self):
        """Test a heavily compared value is eligible once coverage is reached."""
        records = make_records(3, 3, 3, 10)
        pairs = select_pairs(records, 2, random.Random(0))

        assert set(paired_ids(pairs)) == {"v0", "v1", "v2", "v3"}

    def test_result_length_limited_by_pool(self):
        """Test result length is min(n, pool_size // 2)."""
        records = make_records(0, 0, 0)
        pairs = select_pairs(records, 4, random.Random(2))
        assert len(pairs) == 1

    def test_deterministic_with_seed(self):
        """Test pairing is deterministic with the same seed."""
        records = make_records(*([0] * 8))

        pairs1 = select_pairs(records, 4, random.Random(42))
        pairs2 = select_pairs(records, 4, random.Random(42))

        assert [(a.id, b.id) for a, b in pairs1] == [(a.id, b.id) for a, b in pairs2]

    def test_shuffle_reaches_every_value(self):
        """Test every eligible value eventually gets picked for a single pair."""
        records = make_records(0, 0, 0, 0)
        rng = random.Random(9)
        seen = Counter()
        for _ in range(200):
            seen.update(paired_ids(select_pairs(records, 1, rng)))

        assert set(seen) == {"v0", "v1", "v2", "v3"}

    def test_does_not_mutate_records(self):
        """Test selection leaves order and counts untouched."""
        records = make_records(1, 0, 2, 0)
        before = [(r.id, r.comparison_count, r.rating) for r in records]

        select_pairs(records, 2, random.Random(4))

        assert [(r.id, r.comparison_count, r.rating) for r in records] == before

    @pytest.mark.parametrize("size", [0, 1])
    def test_too_few_records(self, size):
        """Test fewer than two values is rejected."""
        with pytest.raises(InsufficientRecordsError) as exc_info:
            select_pairs(make_records(*([0] * size)), 1, random.Random(0))
        assert exc_info.value.available == size

    def test_n_must_be_positive(self):
        """Test n below 1 is rejected."""
        with pytest.raises(ValueError, match="at least 1"):
            select_pairs(make_records(0, 0), 0, random.Random(0))
