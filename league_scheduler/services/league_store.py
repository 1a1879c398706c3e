"""
In-memory store for leagues, teams and games.
Stands in for the app's persisted key-value store; records live only as
long as the store instance.
"""

from typing import List, Dict, Optional, Iterable

from league_scheduler.models import League, Team, Game


class LeagueStore:
    def __init__(self):
        self._leagues: Dict[str, League] = {}
        self._teams: Dict[str, Team] = {}
        self._games: Dict[str, Game] = {}

    def clear(self):
        self._leagues.clear()
        self._teams.clear()
        self._games.clear()

    # Leagues

    def create_league(self, league: League) -> League:
        if league.id in self._leagues:
            raise ValueError(f"League already exists: {league.id}")
        self._leagues[league.id] = league
        return league

    def get_league(self, league_id: str) -> Optional[League]:
        return self._leagues.get(league_id)

    def update_league(self, league: League) -> League:
        if league.id not in self._leagues:
            raise ValueError(f"League not found: {league.id}")
        self._leagues[league.id] = league
        return league

    def get_leagues(self, active_only: bool = False) -> List[League]:
        leagues = list(self._leagues.values())
        if active_only:
            leagues = [league for league in leagues if league.is_active]
        return sorted(leagues, key=lambda league: league.start_date)

    # Teams

    def create_team(self, team: Team) -> Team:
        if team.id in self._teams:
            raise ValueError(f"Team already exists: {team.id}")
        self._teams[team.id] = team
        return team

    def get_team(self, team_id: str) -> Optional[Team]:
        return self._teams.get(team_id)

    def get_teams_by_league(self, league_id: str, active_only: bool = False) -> List[Team]:
        teams = [team for team in self._teams.values() if team.league_id == league_id]
        if active_only:
            teams = [team for team in teams if team.is_active]
        return teams

    # Games

    def create_game(self, game: Game) -> Game:
        if game.id in self._games:
            raise ValueError(f"Game already exists: {game.id}")
        self._games[game.id] = game
        return game

    def create_games(self, games: Iterable[Game]) -> List[Game]:
        games = list(games)
        duplicates = [game.id for game in games if game.id in self._games]
        if duplicates:
            raise ValueError(f"Games already exist: {', '.join(duplicates)}")
        for game in games:
            self._games[game.id] = game
        return games

    def get_game(self, game_id: str) -> Optional[Game]:
        return self._games.get(game_id)

    def get_games_by_league(self, league_id: str) -> List[Game]:
        games = [game for game in self._games.values() if game.league_id == league_id]
        return sorted(games, key=lambda game: game.week)

    def get_games_for_team(self, team_id: str) -> List[Game]:
        games = [game for game in self._games.values() if game.involves_team(team_id)]
        return sorted(games, key=lambda game: game.date)

    def delete_games_by_league(self, league_id: str) -> int:
        game_ids = [game_id for game_id, game in self._games.items() if game.league_id == league_id]
        for game_id in game_ids:
            del self._games[game_id]
        return len(game_ids)
