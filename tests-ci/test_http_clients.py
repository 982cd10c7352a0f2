"""
Tests des clients HTTP (backends/riot_client.py, twitchapi/helix.py)
httpx.MockTransport: aucune requête réseau réelle.
"""
import json

import httpx
import pytest

from backends.riot_client import RiotAPIError, RiotClient
from twitchapi.app_token import AppToken, AppTokenRefresher
from twitchapi.helix import HelixClient, HelixError, parse_started_at


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.unit
class TestRiotClient:

    @pytest.mark.asyncio
    async def test_regional_host_and_headers(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = request.url
            seen["token"] = request.headers.get("X-Riot-Token")
            return httpx.Response(200, json={"puuid": "p1", "gameName": "Some Name", "tagLine": "EUW"})

        riot = RiotClient("RGAPI-key", platform="euw1", region="europe", http_client=mock_client(handler))
        account = await riot.get_account_by_riot_id("Some Name", "EUW")

        assert account["puuid"] == "p1"
        assert seen["url"].host == "europe.api.riotgames.com"
        assert seen["url"].raw_path == b"/riot/account/v1/accounts/by-riot-id/Some%20Name/EUW"
        assert seen["token"] == "RGAPI-key"

    @pytest.mark.asyncio
    async def test_platform_host(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.host == "euw1.api.riotgames.com"
            return httpx.Response(200, json=[{"queueType": "RANKED_SOLO_5x5", "leaguePoints": 12}])

        riot = RiotClient("k", platform="euw1", region="europe", http_client=mock_client(handler))
        entries = await riot.get_league_entries("p1")
        assert entries[0]["leaguePoints"] == 12

    @pytest.mark.asyncio
    async def test_match_ids_window_params(self):
        def handler(request: httpx.Request) -> httpx.Response:
            params = dict(request.url.params)
            assert params == {"startTime": "100", "endTime": "200", "count": "100"}
            return httpx.Response(200, json=["NA1_1", "NA1_2"])

        riot = RiotClient("k", http_client=mock_client(handler))
        assert await riot.get_match_ids("p1", 100, 200) == ["NA1_1", "NA1_2"]

    @pytest.mark.asyncio
    async def test_non_200_raises_with_status(self):
        riot = RiotClient("k", http_client=mock_client(lambda r: httpx.Response(404, text="not found")))

        with pytest.raises(RiotAPIError) as exc:
            await riot.get_active_game("p1")
        assert exc.value.status_code == 404
        assert exc.value.not_found

    @pytest.mark.asyncio
    async def test_network_error_raises(self):
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        riot = RiotClient("k", http_client=mock_client(handler))
        with pytest.raises(RiotAPIError) as exc:
            await riot.get_match("NA1_1")
        assert exc.value.status_code is None

    @pytest.mark.asyncio
    async def test_invalid_json_raises(self):
        riot = RiotClient("k", http_client=mock_client(lambda r: httpx.Response(200, text="<html>")))
        with pytest.raises(RiotAPIError):
            await riot.get_summoner_by_puuid("p1")

    def test_missing_key_rejected(self):
        with pytest.raises(ValueError):
            RiotClient("")


@pytest.fixture
def tokens():
    refresher = AppTokenRefresher("cid", "secret")
    refresher._token = AppToken(access_token="app-token", issued_at=0.0)
    return refresher


@pytest.mark.unit
class TestHelixClient:

    def test_parse_started_at(self):
        assert parse_started_at("2024-05-01T18:00:00Z") == 1714586400

    @pytest.mark.asyncio
    async def test_live_stream(self, tokens):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.params["user_login"] == "streamer"
            assert request.headers["Client-Id"] == "cid"
            assert request.headers["Authorization"] == "Bearer app-token"
            return httpx.Response(200, json={"data": [{
                "title": "Climbing to Diamond", "game_name": "League of Legends",
                "started_at": "2024-05-01T18:00:00Z",
            }]})

        helix = HelixClient("cid", tokens, http_client=mock_client(handler))
        stream = await helix.get_stream("streamer")

        assert stream["title"] == "Climbing to Diamond"
        assert stream["started_at_ts"] == 1714586400
        assert await helix.get_stream_start("streamer") == 1714586400

    @pytest.mark.asyncio
    async def test_offline(self, tokens):
        helix = HelixClient("cid", tokens, http_client=mock_client(lambda r: httpx.Response(200, json={"data": []})))

        assert await helix.get_stream("streamer") is None
        with pytest.raises(HelixError):
            await helix.get_stream_start("streamer")

    @pytest.mark.asyncio
    async def test_no_token(self):
        helix = HelixClient("cid", AppTokenRefresher("cid", "secret"),
                            http_client=mock_client(lambda r: httpx.Response(200, json={"data": []})))
        with pytest.raises(HelixError):
            await helix.get_stream("streamer")

    @pytest.mark.asyncio
    async def test_unauthorized(self, tokens):
        body = json.dumps({"error": "Unauthorized", "status": 401})
        helix = HelixClient("cid", tokens, http_client=mock_client(lambda r: httpx.Response(401, text=body)))
        with pytest.raises(HelixError):
            await helix.get_stream("streamer")
