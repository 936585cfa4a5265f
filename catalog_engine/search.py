"""Search stage.

Linear relevance scoring: every product is scored against the query with a
table of weighted rules and non-matching products are dropped. Text rules
decide whether a product matches at all; boost rules only reorder products
that already matched.
"""

from dataclasses import dataclass
from typing import Callable, Iterable

from catalog_engine.models import Product

# A rule returns how many times it fired for a product (0 = not at all).
RuleCheck = Callable[[Product, str], int]


@dataclass(frozen=True)
class ScoringRule:
    """Weighted relevance rule.

    Attributes:
        name: Rule identifier, used in score breakdowns.
        weight: Points added per hit.
        check: Returns the number of hits for a product and lower-cased query.
    """

    name: str
    weight: int
    check: RuleCheck


def _name_exact(product: Product, term: str) -> int:
    return int(product.name.lower() == term)


def _name_contains(product: Product, term: str) -> int:
    name = product.name.lower()
    return int(name != term and term in name)


def _name_prefix(product: Product, term: str) -> int:
    name = product.name.lower()
    return int(name != term and name.startswith(term))


def _description(product: Product, term: str) -> int:
    return int(term in product.description.lower())


def _long_description(product: Product, term: str) -> int:
    return int(term in (product.long_description or "").lower())


def _tag_exact(product: Product, term: str) -> int:
    return sum(1 for tag in product.tags if tag.lower() == term)


def _tag_contains(product: Product, term: str) -> int:
    return sum(1 for tag in product.tags if tag.lower() != term and term in tag.lower())


def _category(product: Product, term: str) -> int:
    return int(term in product.category.lower())


TEXT_RULES: tuple[ScoringRule, ...] = (
    ScoringRule("name_exact", 100, _name_exact),
    ScoringRule("name_contains", 50, _name_contains),
    ScoringRule("name_prefix", 10, _name_prefix),
    ScoringRule("description", 20, _description),
    ScoringRule("long_description", 10, _long_description),
    ScoringRule("tag_exact", 30, _tag_exact),
    ScoringRule("tag_contains", 10, _tag_contains),
    ScoringRule("category", 5, _category),
)

BOOST_RULES: tuple[ScoringRule, ...] = (
    ScoringRule("featured", 3, lambda product, _: int(product.featured)),
    ScoringRule("in_stock", 3, lambda product, _: int(product.inventory.in_stock)),
)


def normalize_query(query: str | None) -> str:
    """Lower-case and trim a raw query."""
    return (query or "").strip().lower()


def score_breakdown(product: Product, query: str) -> dict[str, int]:
    """Points contributed by each rule that fired.

    Boosts are only reported when at least one text rule fired.

    Args:
        product: Product to score.
        query: Raw search query.

    Returns:
        Mapping of rule name to points.
    """
    term = normalize_query(query)
    if not term:
        return {}

    breakdown = {
        rule.name: rule.weight * hits
        for rule in TEXT_RULES
        if (hits := rule.check(product, term))
    }
    if not breakdown:
        return {}

    breakdown.update(
        {
            rule.name: rule.weight * hits
            for rule in BOOST_RULES
            if (hits := rule.check(product, term))
        }
    )
    return breakdown


def score_product(product: Product, query: str) -> int:
    """Relevance score of a product for a query (0 = no match).

    Scores are additive and unbounded.
    """
    return sum(score_breakdown(product, query).values())


def search_products(products: Iterable[Product], query: str | None) -> list[Product]:
    """Rank products by relevance to a free-text query.

    A blank query skips the stage: every product passes through in its
    original order. Otherwise products scoring 0 are dropped and the rest
    are ordered by descending score, equal scores keeping input order.

    Args:
        products: Products to search.
        query: Raw search query.

    Returns:
        New list of matching products, best match first.
    """
    if not normalize_query(query):
        return list(products)

    scored = [(score_product(p, query), p) for p in products]
    ranked = sorted(
        (pair for pair in scored if pair[0] > 0),
        key=lambda pair: pair[0],
        reverse=True,
    )
    return [product for _, product in ranked]
