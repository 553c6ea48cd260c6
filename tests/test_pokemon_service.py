"""
Pokedex Backend — Pokemon Service Unit Tests
==============================================

What:  Tests for PokemonService record operations.
How:   Happy paths run against an in-memory SQLite database; database
       failures are simulated with a mocked AsyncSession.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from pokedex.exceptions import DatabaseError, NotFoundError, ValidationError
from pokedex.schemas.pokemon import PokemonDocument
from pokedex.services.pokemon_service import PokemonService


def _record(pokemon_id: int, english: str, **names) -> PokemonDocument:
    return PokemonDocument.model_validate(
        {"id": pokemon_id, "name": {"english": english, **names}}
    )


class TestCreateAndGet:

    def setup_method(self):
        self.service = PokemonService()

    @pytest.mark.asyncio
    async def test_create_then_get_returns_same_record(self, db_session, sample_pokemon):
        created = await self.service.create_pokemon(
            db_session, PokemonDocument.model_validate(sample_pokemon)
        )
        await db_session.commit()

        assert created.message == "Pokemon created successfully"
        assert created.pokemon == sample_pokemon
        assert await self.service.get_pokemon(db_session, 25) == sample_pokemon

    @pytest.mark.asyncio
    async def test_extra_attributes_are_kept(self, db_session):
        payload = PokemonDocument.model_validate(
            {"id": 1, "name": {"english": "Bulbasaur"}, "species": "Seed Pokémon"}
        )

        created = await self.service.create_pokemon(db_session, payload)

        assert created.pokemon == {
            "id": 1,
            "name": {"english": "Bulbasaur"},
            "species": "Seed Pokémon",
        }

    @pytest.mark.asyncio
    async def test_duplicate_id_raises_validation_error(self, db_session):
        await self.service.create_pokemon(db_session, _record(4, "Charmander"))

        with pytest.raises(ValidationError):
            await self.service.create_pokemon(db_session, _record(4, "Charmeleon"))

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, db_session):
        with pytest.raises(NotFoundError, match="Pokemon not found"):
            await self.service.get_pokemon(db_session, 999)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("pokemon_id", [0, -7, 2**31, 10**20])
    async def test_out_of_range_id_is_not_found_without_querying(self, mock_db_session, pokemon_id):
        with pytest.raises(NotFoundError):
            await self.service.get_pokemon(mock_db_session, pokemon_id)
        with pytest.raises(NotFoundError):
            await self.service.delete_pokemon(mock_db_session, pokemon_id)

        mock_db_session.execute.assert_not_called()


class TestList:

    def setup_method(self):
        self.service = PokemonService()

    @pytest.mark.asyncio
    async def test_list_empty(self, db_session):
        result = await self.service.list_pokemons(db_session)
        assert result.pokemons == []
        assert result.total_pokemons == 0

    @pytest.mark.asyncio
    async def test_list_in_insertion_order_with_count(self, db_session):
        for pokemon_id, english in [(7, "Squirtle"), (1, "Bulbasaur"), (4, "Charmander")]:
            await self.service.create_pokemon(db_session, _record(pokemon_id, english))
        await db_session.commit()

        result = await self.service.list_pokemons(db_session)

        assert [p["id"] for p in result.pokemons] == [7, 1, 4]
        assert result.total_pokemons == len(result.pokemons) == 3

    @pytest.mark.asyncio
    async def test_list_database_failure(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("connection lost"))

        with pytest.raises(DatabaseError, match="connection lost"):
            await self.service.list_pokemons(mock_db_session)


class TestSearch:

    def setup_method(self):
        self.service = PokemonService()

    @pytest.mark.asyncio
    async def test_search_matches_substring_ignoring_case(self, db_session, sample_pokemon):
        await self.service.create_pokemon(db_session, PokemonDocument.model_validate(sample_pokemon))

        result = await self.service.search_by_name(db_session, "pika")

        assert result["id"] == 25

    @pytest.mark.asyncio
    async def test_search_matches_non_english_names(self, db_session):
        await self.service.create_pokemon(
            db_session, _record(1, "Bulbasaur", french="Bulbizarre", japanese="フシギダネ")
        )

        assert (await self.service.search_by_name(db_session, "BIZARRE"))["id"] == 1
        assert (await self.service.search_by_name(db_session, "フシギ"))["id"] == 1

    @pytest.mark.asyncio
    async def test_search_returns_first_inserted_match(self, db_session):
        await self.service.create_pokemon(db_session, _record(5, "Charmeleon"))
        await self.service.create_pokemon(db_session, _record(4, "Charmander"))

        result = await self.service.search_by_name(db_session, "charm")

        assert result["id"] == 5

    @pytest.mark.asyncio
    async def test_search_treats_wildcards_literally(self, db_session):
        await self.service.create_pokemon(db_session, _record(1, "Bulbasaur"))

        with pytest.raises(NotFoundError):
            await self.service.search_by_name(db_session, "%")

    @pytest.mark.asyncio
    async def test_search_no_match(self, db_session):
        await self.service.create_pokemon(db_session, _record(1, "Bulbasaur"))

        with pytest.raises(NotFoundError, match="Pokemon not found"):
            await self.service.search_by_name(db_session, "mewtwo")


class TestUpdate:

    def setup_method(self):
        self.service = PokemonService()

    @pytest.mark.asyncio
    async def test_update_replaces_whole_document(self, db_session, sample_pokemon):
        await self.service.create_pokemon(db_session, PokemonDocument.model_validate(sample_pokemon))

        updated = await self.service.update_pokemon(db_session, 25, _record(25, "Raichu"))

        assert updated.message == "Pokemon updated successfully"
        assert updated.pokemon == {"id": 25, "name": {"english": "Raichu"}}
        stored = await self.service.get_pokemon(db_session, 25)
        assert "type" not in stored
        assert "base" not in stored

    @pytest.mark.asyncio
    async def test_update_can_change_id(self, db_session):
        await self.service.create_pokemon(db_session, _record(1, "Bulbasaur"))

        await self.service.update_pokemon(db_session, 1, _record(2, "Ivysaur"))

        assert (await self.service.get_pokemon(db_session, 2))["name"]["english"] == "Ivysaur"
        with pytest.raises(NotFoundError):
            await self.service.get_pokemon(db_session, 1)

    @pytest.mark.asyncio
    async def test_update_missing_raises_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            await self.service.update_pokemon(db_session, 404, _record(404, "Missingno"))

    @pytest.mark.asyncio
    async def test_update_to_taken_id_raises_validation_error(self, db_session):
        await self.service.create_pokemon(db_session, _record(1, "Bulbasaur"))
        await self.service.create_pokemon(db_session, _record(2, "Ivysaur"))

        with pytest.raises(ValidationError):
            await self.service.update_pokemon(db_session, 2, _record(1, "Ivysaur"))


class TestDelete:

    def setup_method(self):
        self.service = PokemonService()

    @pytest.mark.asyncio
    async def test_delete_returns_removed_record(self, db_session, sample_pokemon):
        await self.service.create_pokemon(db_session, PokemonDocument.model_validate(sample_pokemon))

        deleted = await self.service.delete_pokemon(db_session, 25)

        assert deleted.message == "Pokemon deleted successfully"
        assert deleted.pokemon == sample_pokemon
        with pytest.raises(NotFoundError):
            await self.service.get_pokemon(db_session, 25)

    @pytest.mark.asyncio
    async def test_delete_missing_raises_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            await self.service.delete_pokemon(db_session, 999)

    @pytest.mark.asyncio
    async def test_delete_database_failure(self, mock_db_session):
        pokemon = MagicMock()
        pokemon.to_record.return_value = {"id": 3}
        mock_db_session.execute.return_value = MagicMock(
            scalar_one_or_none=MagicMock(return_value=pokemon)
        )
        mock_db_session.flush.side_effect = OperationalError("DELETE", {}, Exception("database is locked"))

        with pytest.raises(DatabaseError, match="database is locked"):
            await self.service.delete_pokemon(mock_db_session, 3)
