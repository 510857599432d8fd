"""
PetPal Backend — Pet Filter Tests
===================================

What:  Tests for the typed listing filters, both construction and their
       effect against a real (SQLite) database.

What we test:
    ✅ Query parameters → filter objects (empty strings ignored)
    ✅ Discriminated union parses filters from plain dicts
    ✅ Equality, trait membership, inclusive happiness range, public/owned
"""

import pytest
from pydantic import TypeAdapter

from petpal.schemas.pet import PetCreate, PetStatsInput
from petpal.services.pet_filters import (
    ContainsFilter,
    EqualsFilter,
    PetFilter,
    RangeFilter,
    build_listing_filters,
    owned_by,
    public_only,
)
from petpal.services.pet_service import pet_service


class TestBuildListingFilters:
    def test_no_parameters_no_filters(self):
        assert build_listing_filters() == []

    def test_empty_strings_ignored(self):
        assert build_listing_filters(species="", rarity="", trait="") == []

    def test_all_parameters(self):
        filters = build_listing_filters(
            species="cat", rarity="Epic", trait="lazy", min_happiness=60, max_happiness=80
        )
        assert filters == [
            EqualsFilter(field="species", value="cat"),
            EqualsFilter(field="rarity", value="Epic"),
            ContainsFilter(value="lazy"),
            RangeFilter(field="happiness", gte=60, lte=80),
        ]

    def test_single_bound(self):
        (only,) = build_listing_filters(min_happiness=10)
        assert isinstance(only, RangeFilter)
        assert only.gte == 10 and only.lte is None

    def test_discriminated_union_from_dict(self):
        adapter = TypeAdapter(PetFilter)
        parsed = adapter.validate_python({"kind": "contains", "field": "traits", "value": "shy"})
        assert isinstance(parsed, ContainsFilter)
        parsed = adapter.validate_python({"kind": "range", "field": "energy", "lte": 5})
        assert isinstance(parsed, RangeFilter)


async def _create(db, name, species="cat", happiness=50, traits=None, owner_id=None, rarity=None):
    return await pet_service.create_pet(
        db,
        PetCreate(
            name=name,
            species=species,
            rarity=rarity,
            traits=traits or [],
            stats=PetStatsInput(happiness=happiness),
        ),
        owner_id=owner_id,
    )


class TestFiltersAgainstDatabase:
    @pytest.mark.asyncio
    async def test_species_equality(self, db_session):
        await _create(db_session, "Tom", species="cat")
        await _create(db_session, "Rex", species="dog")

        pets = await pet_service.find_pets(db_session, [EqualsFilter(field="species", value="dog")])
        assert [p.name for p in pets] == ["Rex"]

    @pytest.mark.asyncio
    async def test_rarity_equality(self, db_session):
        await _create(db_session, "Plain")
        await _create(db_session, "Shiny", rarity="Legendary")

        pets = await pet_service.find_pets(db_session, build_listing_filters(rarity="Legendary"))
        assert [p.name for p in pets] == ["Shiny"]

    @pytest.mark.asyncio
    async def test_trait_membership(self, db_session):
        await _create(db_session, "Brave", traits=["brave", "loyal"])
        await _create(db_session, "Lazy", traits=["lazy"])
        await _create(db_session, "None")

        pets = await pet_service.find_pets(db_session, [ContainsFilter(value="loyal")])
        assert [p.name for p in pets] == ["Brave"]

    @pytest.mark.asyncio
    async def test_happiness_range_inclusive(self, db_session):
        for happiness in (59, 60, 70, 80, 81):
            await _create(db_session, f"H{happiness}", happiness=happiness)

        pets = await pet_service.find_pets(
            db_session, build_listing_filters(min_happiness=60, max_happiness=80)
        )
        assert sorted(p.happiness for p in pets) == [60, 70, 80]

    @pytest.mark.asyncio
    async def test_filters_are_anded(self, db_session):
        await _create(db_session, "A", species="cat", traits=["shy"], happiness=90)
        await _create(db_session, "B", species="cat", traits=["shy"], happiness=10)
        await _create(db_session, "C", species="dog", traits=["shy"], happiness=90)

        pets = await pet_service.find_pets(
            db_session,
            build_listing_filters(species="cat", trait="shy", min_happiness=50),
        )
        assert [p.name for p in pets] == ["A"]

    @pytest.mark.asyncio
    async def test_public_and_owned(self, db_session, make_user):
        owner = await make_user("filterowner")
        await _create(db_session, "Public")
        await _create(db_session, "Owned", owner_id=owner.id)

        public = await pet_service.find_pets(db_session, [public_only()])
        owned = await pet_service.find_pets(db_session, [owned_by(owner.id)])
        assert [p.name for p in public] == ["Public"]
        assert [p.name for p in owned] == ["Owned"]
