# ABOUTME: Unit tests for the async PokeAPI client and its disk cache.
# ABOUTME: Uses httpx.MockTransport so no request ever leaves the test process.

import asyncio
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest

from letsgodex.config import DexConfig
from letsgodex.ingestion.pokeapi import (
    cache_filename,
    fetch_json,
    get_evolution_chain,
    get_move,
    get_multiple_type_data,
    get_pokemon,
    get_pokemon_list,
    get_pokemon_list_with_details,
    get_pokemon_with_species,
    resolve_url,
    search_pokemon,
    warm_cache,
)

API = "https://pokeapi.co/api/v2"

KANTO_SAMPLE = [
    ("bulbasaur", 1),
    ("ivysaur", 2),
    ("pikachu", 25),
    ("raichu", 26),
    ("mewtwo", 150),
    ("mew", 151),
]


def _list_payload(entries: list[tuple[str, int]]) -> dict[str, Any]:
    return {
        "count": 1302,
        "next": None,
        "previous": None,
        "results": [{"name": name, "url": f"{API}/pokemon/{dex_id}/"} for name, dex_id in entries],
    }


class RecordingTransport:
    """Mock transport that records requested URLs and answers from a handler."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []
        self._handler = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


def _run_with_client(transport: RecordingTransport, make_coro: Callable[[httpx.AsyncClient], Any]) -> Any:
    async def scenario() -> Any:
        async with transport.client() as client:
            return await make_coro(client)

    return asyncio.run(scenario())


class TestResolveUrl:
    """Tests for resolve_url and cache_filename functions."""

    def test_relative_endpoint(self) -> None:
        """Relative endpoints are joined to the API base URL."""
        assert resolve_url("/type/fire") == f"{API}/type/fire"

    def test_full_url_passes_through(self) -> None:
        """Resource URLs from payloads are used as-is."""
        assert resolve_url(f"{API}/evolution-chain/10/") == f"{API}/evolution-chain/10/"

    def test_cache_filename(self) -> None:
        """Cache names are filesystem-safe and include the query string."""
        assert cache_filename(f"{API}/pokemon?limit=20&offset=0") == "pokeapi_co_api_v2_pokemon_limit_20_offset_0.json"


class TestFetchJson:
    """Tests for fetch_json function."""

    def test_downloads_and_caches(self, tmp_path: Path) -> None:
        """A miss hits the network and writes the body to the cache."""
        transport = RecordingTransport(lambda request: httpx.Response(200, json={"id": 25}))

        data = _run_with_client(transport, lambda client: fetch_json("/pokemon/25", client=client, cache_dir=tmp_path))

        assert data == {"id": 25}
        assert len(transport.requests) == 1
        cached = tmp_path / cache_filename(f"{API}/pokemon/25")
        assert json.loads(cached.read_text(encoding="utf-8")) == {"id": 25}

    def test_cache_hit_skips_network(self, tmp_path: Path) -> None:
        """A cached response is served without a request."""
        (tmp_path / cache_filename(f"{API}/pokemon/25")).write_text('{"id": 25, "cached": true}', encoding="utf-8")
        transport = RecordingTransport(lambda request: httpx.Response(500))

        data = _run_with_client(transport, lambda client: fetch_json("/pokemon/25", client=client, cache_dir=tmp_path))

        assert data == {"id": 25, "cached": True}
        assert transport.requests == []

    def test_force_refreshes_cache(self, tmp_path: Path) -> None:
        """force=True re-downloads and overwrites the cached body."""
        (tmp_path / cache_filename(f"{API}/pokemon/25")).write_text('{"id": 0}', encoding="utf-8")
        transport = RecordingTransport(lambda request: httpx.Response(200, json={"id": 25}))

        data = _run_with_client(
            transport, lambda client: fetch_json("/pokemon/25", client=client, cache_dir=tmp_path, force=True)
        )

        assert data == {"id": 25}
        assert len(transport.requests) == 1

    def test_error_is_raised_and_not_cached(self, tmp_path: Path) -> None:
        """Server errors propagate and leave no cache file behind."""
        transport = RecordingTransport(lambda request: httpx.Response(500))

        with pytest.raises(httpx.HTTPStatusError):
            _run_with_client(transport, lambda client: fetch_json("/pokemon/25", client=client, cache_dir=tmp_path))

        assert list(tmp_path.iterdir()) == []


class TestSingleResources:
    """Tests for single resource lookups."""

    def test_get_pokemon(self, tmp_path: Path, load_resource) -> None:
        """Pokemon payloads are parsed into models."""
        payload = load_resource("pokemon_pikachu.json")
        transport = RecordingTransport(lambda request: httpx.Response(200, json=payload))

        pokemon = _run_with_client(transport, lambda client: get_pokemon(25, client=client, cache_dir=tmp_path))

        assert pokemon is not None
        assert pokemon.name == "pikachu"
        assert transport.requests[0].url.path == "/api/v2/pokemon/25"

    def test_get_pokemon_not_found(self, tmp_path: Path) -> None:
        """Unknown Pokemon give None instead of an error."""
        transport = RecordingTransport(lambda request: httpx.Response(404, text="Not Found"))

        pokemon = _run_with_client(transport, lambda client: get_pokemon("missingno", client=client, cache_dir=tmp_path))

        assert pokemon is None

    def test_get_move_not_found(self, tmp_path: Path) -> None:
        """Unknown moves give None instead of an error."""
        transport = RecordingTransport(lambda request: httpx.Response(404, text="Not Found"))

        move = _run_with_client(transport, lambda client: get_move("splash-attack", client=client, cache_dir=tmp_path))

        assert move is None

    def test_server_error_propagates(self, tmp_path: Path) -> None:
        """Only 404 is swallowed."""
        transport = RecordingTransport(lambda request: httpx.Response(503))

        with pytest.raises(httpx.HTTPStatusError):
            _run_with_client(transport, lambda client: get_pokemon(25, client=client, cache_dir=tmp_path))


class TestGetPokemonList:
    """Tests for get_pokemon_list and get_pokemon_list_with_details functions."""

    def test_limit_is_clamped_to_region(self, tmp_path: Path) -> None:
        """The last page never reaches past the regional maximum."""
        transport = RecordingTransport(lambda request: httpx.Response(200, json=_list_payload([])))

        _run_with_client(
            transport,
            lambda client: get_pokemon_list(20, 140, DexConfig(max_pokemon=151), client=client, cache_dir=tmp_path),
        )

        params = transport.requests[0].url.params
        assert params["limit"] == "11"
        assert params["offset"] == "140"

    def test_offset_past_region_makes_no_request(self, tmp_path: Path) -> None:
        """An offset beyond the maximum gives an empty page without a request."""
        transport = RecordingTransport(lambda request: httpx.Response(500))

        page = _run_with_client(
            transport,
            lambda client: get_pokemon_list(20, 151, DexConfig(max_pokemon=151), client=client, cache_dir=tmp_path),
        )

        assert page.results == []
        assert page.count == 151
        assert transport.requests == []

    def test_with_details_keeps_list_order(self, tmp_path: Path, load_resource) -> None:
        """Detail payloads come back in list order."""
        pikachu = load_resource("pokemon_pikachu.json")
        raichu = {**pikachu, "id": 26, "name": "raichu"}

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/api/v2/pokemon":
                return httpx.Response(200, json=_list_payload([("pikachu", 25), ("raichu", 26)]))
            if request.url.path == "/api/v2/pokemon/25/":
                return httpx.Response(200, json=pikachu)
            return httpx.Response(200, json=raichu)

        transport = RecordingTransport(handler)

        pokemon = _run_with_client(
            transport,
            lambda client: get_pokemon_list_with_details(2, 24, DexConfig(), client=client, cache_dir=tmp_path),
        )

        assert [p.name for p in pokemon] == ["pikachu", "raichu"]
        assert len(transport.requests) == 3


class TestSearchPokemon:
    """Tests for search_pokemon function."""

    @pytest.fixture
    def transport(self) -> RecordingTransport:
        return RecordingTransport(lambda request: httpx.Response(200, json=_list_payload(KANTO_SAMPLE)))

    def test_substring_match(self, transport: RecordingTransport, tmp_path: Path) -> None:
        """Names containing the query match, with dex numbers parsed from URLs."""
        results = _run_with_client(
            transport, lambda client: search_pokemon("saur", DexConfig(), client=client, cache_dir=tmp_path)
        )

        assert [(r.name, r.id) for r in results] == [("bulbasaur", 1), ("ivysaur", 2)]

    def test_case_insensitive(self, transport: RecordingTransport, tmp_path: Path) -> None:
        """Queries are lowercased and trimmed."""
        results = _run_with_client(
            transport, lambda client: search_pokemon("  MEW ", DexConfig(), client=client, cache_dir=tmp_path)
        )

        assert [r.name for r in results] == ["mewtwo", "mew"]

    def test_requests_whole_region(self, transport: RecordingTransport, tmp_path: Path) -> None:
        """The search lists exactly the regional dex."""
        _run_with_client(
            transport,
            lambda client: search_pokemon("pika", DexConfig(max_pokemon=151), client=client, cache_dir=tmp_path),
        )

        assert transport.requests[0].url.params["limit"] == "151"

    def test_blank_query(self, transport: RecordingTransport, tmp_path: Path) -> None:
        """Blank queries return nothing without a request."""
        results = _run_with_client(
            transport, lambda client: search_pokemon("   ", DexConfig(), client=client, cache_dir=tmp_path)
        )

        assert results == []
        assert transport.requests == []

    def test_no_match(self, transport: RecordingTransport, tmp_path: Path) -> None:
        """Unknown names give an empty list."""
        results = _run_with_client(
            transport, lambda client: search_pokemon("zzz", DexConfig(), client=client, cache_dir=tmp_path)
        )

        assert results == []


class TestGetMultipleTypeData:
    """Tests for get_multiple_type_data function."""

    def test_preserves_requested_order(self, tmp_path: Path, load_resource) -> None:
        """Types come back in the order they were requested."""

        def handler(request: httpx.Request) -> httpx.Response:
            name = request.url.path.rsplit("/", 1)[-1]
            return httpx.Response(200, json=load_resource(f"type_{name}.json"))

        transport = RecordingTransport(handler)

        types = _run_with_client(
            transport,
            lambda client: get_multiple_type_data(["water", "ground", "fire"], client=client, cache_dir=tmp_path),
        )

        assert [t.name for t in types] == ["water", "ground", "fire"]
        assert types[1].damage_relations.no_damage_from[0].name == "electric"


class TestGetPokemonWithSpecies:
    """Tests for get_pokemon_with_species function."""

    def test_fetches_both(self, tmp_path: Path, load_resource) -> None:
        """Pokemon and species payloads are both parsed."""
        payloads = {
            "/api/v2/pokemon/25": load_resource("pokemon_pikachu.json"),
            "/api/v2/pokemon-species/25": load_resource("species_pikachu.json"),
        }
        transport = RecordingTransport(lambda request: httpx.Response(200, json=payloads[request.url.path]))

        pokemon, species = _run_with_client(
            transport, lambda client: get_pokemon_with_species(25, client=client, cache_dir=tmp_path)
        )

        assert pokemon is not None
        assert pokemon.name == "pikachu"
        assert species is not None
        assert species.evolution_chain is not None
        assert species.evolution_chain.url == f"{API}/evolution-chain/10/"
        assert len(transport.requests) == 2

    def test_missing_species(self, tmp_path: Path, load_resource) -> None:
        """A missing species gives None without hiding the Pokemon."""
        pikachu = load_resource("pokemon_pikachu.json")

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/api/v2/pokemon/25":
                return httpx.Response(200, json=pikachu)
            return httpx.Response(404, text="Not Found")

        transport = RecordingTransport(handler)

        pokemon, species = _run_with_client(
            transport, lambda client: get_pokemon_with_species(25, client=client, cache_dir=tmp_path)
        )

        assert pokemon is not None
        assert species is None


class TestGetEvolutionChain:
    """Tests for get_evolution_chain function."""

    def test_uses_species_url(self, tmp_path: Path, load_resource) -> None:
        """The evolution chain URL from a species payload is requested as-is."""
        payload = load_resource("evolution_chain_pichu.json")
        transport = RecordingTransport(lambda request: httpx.Response(200, json=payload))

        chain = _run_with_client(
            transport,
            lambda client: get_evolution_chain(f"{API}/evolution-chain/10/", client=client, cache_dir=tmp_path),
        )

        assert str(transport.requests[0].url) == f"{API}/evolution-chain/10/"
        assert chain.id == 10
        assert chain.chain.species.name == "pichu"
        assert chain.chain.evolves_to[0].evolves_to[0].species.name == "raichu"


class TestWarmCache:
    """Tests for warm_cache function."""

    @pytest.fixture
    def transport(self) -> RecordingTransport:
        sample = KANTO_SAMPLE[:3]

        def handler(request: httpx.Request) -> httpx.Response:
            path = request.url.path
            if path == "/api/v2/pokemon":
                return httpx.Response(200, json=_list_payload(sample))
            if path.startswith("/api/v2/pokemon/"):
                return httpx.Response(200, json={"id": int(path.strip("/").rsplit("/", 1)[-1])})
            name = path.rsplit("/", 1)[-1]
            return httpx.Response(200, json={"id": 1, "name": name, "damage_relations": {}})

        return RecordingTransport(handler)

    def test_counts_and_requests(self, transport: RecordingTransport, tmp_path: Path) -> None:
        """The list, every listed Pokemon, and all 18 types are downloaded."""
        counts = _run_with_client(
            transport,
            lambda client: warm_cache(DexConfig(max_pokemon=3), client=client, cache_dir=tmp_path),
        )

        type_requests = [r for r in transport.requests if r.url.path.startswith("/api/v2/type/")]
        assert counts == {"pokemon": 3, "types": 18}
        assert len(type_requests) == 18
        assert len(transport.requests) == 1 + 3 + 18
        assert transport.requests[0].url.params["limit"] == "3"
        assert len(list(tmp_path.iterdir())) == 1 + 3 + 18

    def test_second_run_is_served_from_cache(self, transport: RecordingTransport, tmp_path: Path) -> None:
        """Without force, a warm cache makes no requests."""
        config = DexConfig(max_pokemon=3)
        _run_with_client(transport, lambda client: warm_cache(config, client=client, cache_dir=tmp_path))
        transport.requests.clear()

        counts = _run_with_client(transport, lambda client: warm_cache(config, client=client, cache_dir=tmp_path))

        assert counts == {"pokemon": 3, "types": 18}
        assert transport.requests == []

    def test_force_redownloads(self, transport: RecordingTransport, tmp_path: Path) -> None:
        """force=True re-requests every resource even when cached."""
        config = DexConfig(max_pokemon=3)
        _run_with_client(transport, lambda client: warm_cache(config, client=client, cache_dir=tmp_path))
        transport.requests.clear()

        _run_with_client(
            transport, lambda client: warm_cache(config, client=client, cache_dir=tmp_path, force=True)
        )

        assert len(transport.requests) == 1 + 3 + 18

    def test_error_propagates(self, tmp_path: Path) -> None:
        """HTTP errors abort the warm-up."""
        transport = RecordingTransport(lambda request: httpx.Response(503))

        with pytest.raises(httpx.HTTPStatusError):
            _run_with_client(
                transport, lambda client: warm_cache(DexConfig(max_pokemon=3), client=client, cache_dir=tmp_path)
            )
