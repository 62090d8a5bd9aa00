from __future__ import annotations

import pytest

from scentmatch.analysis.models import TRAIT_NAMES
from scentmatch.analysis.validator import validate_record
from scentmatch.matching.config import SimilarityWeights
from scentmatch.matching.data_store import get_catalog
from scentmatch.matching.models import CatalogItem, RankedRecommendation
from scentmatch.matching.ranker import (
    filter_by_category,
    filter_by_trait,
    rank_items,
    validate_recommendations,
)
from scentmatch.matching.retrieval import rank_candidates

SUBJECT = validate_record({
    "traits": {
        "sexy": 7, "cute": 5, "charisma": 8, "darkness": 3, "freshness": 6,
        "elegance": 9, "freedom": 4, "luxury": 10, "purity": 2, "uniqueness": 1,
    },
    "scentCategories": {
        "citrus": 2, "floral": 9, "woody": 4, "musky": 7, "fruity": 3, "spicy": 5,
    },
})

MATCH = CatalogItem(
    id="X",
    name="Velvet Rose",
    traits=SUBJECT.traits.as_vector(),
    categories={"citrus": 2, "floral": 10, "woody": 3, "musky": 6, "fruity": 2, "spicy": 4},
    description="A velvety rose over soft suede. Timeless.",
    keywords=("romantic", "graceful", "classic", "timeless"),
)
ORTHOGONAL = CatalogItem(
    id="Y",
    name="Blank Canvas",
    traits={name: 0 for name in TRAIT_NAMES},
    categories=SUBJECT.scent_categories.as_vector(),
    description="Nothing in common.",
    keywords=("quiet",),
)
PARTIAL = CatalogItem(
    id="Z",
    name="Citrus Pop",
    traits={"sexy": 2, "cute": 9, "freshness": 10, "purity": 8},
    categories={"citrus": 10, "fruity": 7},
    description="Zesty and bright",
    keywords=("zesty",),
)


# ── Scenarios ────────────────────────────────────────────────────────────


def test_identical_item_ranks_first():
    results = rank_candidates(SUBJECT, [MATCH, ORTHOGONAL], 1)
    assert len(results) == 1
    assert results[0].catalog_item_id == "X"
    assert results[0].score == pytest.approx(1.0)
    assert results[0].rank == 1
    assert results[0].justification
    assert results[0].grade == "perfect match"


def test_identical_item_ranks_first_regardless_of_catalog_order():
    results = rank_candidates(SUBJECT, [ORTHOGONAL, MATCH], 2)
    assert [r.catalog_item_id for r in results] == ["X", "Y"]
    assert results[1].score == 0.0
    assert [r.rank for r in results] == [1, 2]


def test_empty_catalog_returns_empty_list():
    assert rank_candidates(SUBJECT, [], 3) == []


def test_non_positive_top_n_returns_empty_list():
    assert rank_candidates(SUBJECT, [MATCH], 0) == []
    assert rank_candidates(SUBJECT, [MATCH], -2) == []


def test_top_n_larger_than_catalog_returns_everything():
    results = rank_candidates(SUBJECT, [MATCH, ORTHOGONAL, PARTIAL], 10)
    assert len(results) == 3


# ── Ordering ─────────────────────────────────────────────────────────────


class TestOrdering:
    def test_scores_are_descending(self):
        results = rank_candidates(SUBJECT, [ORTHOGONAL, PARTIAL, MATCH], 3)
        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)

    def test_ties_keep_catalog_order(self):
        first = MATCH.model_copy(update={"id": "first"})
        second = MATCH.model_copy(update={"id": "second"})
        assert [r.catalog_item_id for r in rank_items(SUBJECT, [first, second], 2)] == [
            "first",
            "second",
        ]
        assert [r.catalog_item_id for r in rank_items(SUBJECT, [second, first], 2)] == [
            "second",
            "first",
        ]

    def test_ranking_is_deterministic(self):
        catalog = [PARTIAL, ORTHOGONAL, MATCH]
        first = rank_candidates(SUBJECT, catalog, 3)
        second = rank_candidates(SUBJECT, catalog, 3)
        assert first == second
        assert [r.model_dump_json() for r in first] == [r.model_dump_json() for r in second]

    def test_category_weight_reorders(self):
        weights = SimilarityWeights(trait=0.0, category=1.0)
        results = rank_candidates(SUBJECT, [MATCH, ORTHOGONAL], 2, weights)
        assert results[0].catalog_item_id == "Y"

    def test_catalog_is_not_mutated(self):
        catalog = [PARTIAL, MATCH, ORTHOGONAL]
        snapshot = [item.model_copy(deep=True) for item in catalog]
        rank_candidates(SUBJECT, catalog, 2)
        assert catalog == snapshot

    def test_stubs_have_no_justification(self):
        stubs = rank_items(SUBJECT, [MATCH, PARTIAL], 2)
        assert all(s.justification is None for s in stubs)

    def test_justification_belongs_to_its_own_item(self):
        twin = MATCH.model_copy(update={"name": "Velvet Twin"})
        results = rank_candidates(SUBJECT, [MATCH, twin], 2)
        assert "'Velvet Rose'" in results[0].justification
        assert "'Velvet Twin'" in results[1].justification


# ── Filters ──────────────────────────────────────────────────────────────


class TestFilters:
    CATALOG = [MATCH, ORTHOGONAL, PARTIAL]

    def test_filter_by_trait(self):
        results = rank_candidates(SUBJECT, self.CATALOG, 3)
        kept = filter_by_trait(results, self.CATALOG, "freshness", 8)
        assert [r.catalog_item_id for r in kept] == ["Z"]

    def test_filter_by_category(self):
        results = rank_candidates(SUBJECT, self.CATALOG, 3)
        kept = filter_by_category(results, self.CATALOG, "floral", 9)
        assert sorted(r.catalog_item_id for r in kept) == ["X", "Y"]

    def test_filter_skips_missing_dimension(self):
        results = rank_candidates(SUBJECT, self.CATALOG, 3)
        assert filter_by_category(results, self.CATALOG, "woody", 1) != []
        assert all(
            r.catalog_item_id != "Z"
            for r in filter_by_category(results, self.CATALOG, "woody", 1)
        )

    def test_validate_recommendations_drops_bad_entries(self):
        good = RankedRecommendation(catalog_item_id="X", score=0.5, rank=1)
        no_id = RankedRecommendation(catalog_item_id="", score=0.5, rank=2)
        out_of_range = RankedRecommendation.model_construct(
            catalog_item_id="Y", score=1.5, rank=3,
        )
        assert validate_recommendations([good, no_id, out_of_range]) == [good]


# ── Bundled catalog ──────────────────────────────────────────────────────


def test_bundled_catalog_ranks():
    catalog = get_catalog()
    results = rank_candidates(SUBJECT, catalog, 3)
    assert len(results) == 3
    ids = {item.id for item in catalog}
    assert all(r.catalog_item_id in ids for r in results)
    assert all(0.0 <= r.score <= 1.0 for r in results)
