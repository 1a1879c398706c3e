"""
Season schedule generator.
Builds round-robin pairings, repeats them to fill the season, and greedily
packs them into weeks so rest time and bye weeks stay balanced across teams.
"""

import random
from typing import List, Dict, Set, Optional, Iterable

from league_scheduler.models import (
    League, Team, LeagueScheduleConfig, Matchup, ScheduleGame, ScheduleStats
)
from league_scheduler.core.config import MAX_REST_JITTER, MIN_TEAMS_PER_SCHEDULE
from league_scheduler.core.logging_config import get_logger

logger = get_logger(__name__)


class SeasonScheduler:
    """
    Generates a season of weekly games for one league.

    The generator is a pure computation: it reads the config and team ids it
    was given and never touches storage. The only nondeterminism is the
    tie-break jitter, drawn from ``rng`` so callers can seed it.
    """

    def __init__(
        self,
        config: LeagueScheduleConfig,
        team_ids: Iterable[str],
        rng: Optional[random.Random] = None
    ):
        """
        Initialize the scheduler with league settings and active teams.

        Args:
            config: Fields, start times, season length and calendar settings
            team_ids: Ids of the active teams, in the order pairings are built
            rng: Random source for the tie-break jitter (defaults to a fresh Random)
        """
        self.config = config
        # Duplicate ids would pair a team with itself
        self.team_ids: List[str] = list(dict.fromkeys(team_ids))
        self.rng = rng if rng is not None else random.Random()

        self.available_fields = config.available_fields
        self.game_start_times = list(config.game_start_times)
        self.season_weeks = config.season_weeks
        self.games_per_week = config.games_per_week
        self.max_teams_per_week = config.max_teams_per_week

    @classmethod
    def from_league(
        cls,
        league: League,
        teams: Iterable[Team],
        rng: Optional[random.Random] = None
    ) -> 'SeasonScheduler':
        """Build a scheduler for a league, keeping only its active teams."""
        active_ids = [team.id for team in teams if team.is_active]
        return cls(league.schedule_config(), active_ids, rng=rng)

    @property
    def will_have_bye_weeks(self) -> bool:
        """True when more teams exist than can play in a single week."""
        return len(self.team_ids) > self.max_teams_per_week

    def generate_season_schedule(self) -> List[ScheduleGame]:
        """
        Generate the complete season schedule.
        This is the main entry point for schedule generation.

        Returns:
            Games ordered by week, then by slot within the week. Empty when
            fewer than two teams are active.
        """
        if len(self.team_ids) < MIN_TEAMS_PER_SCHEDULE:
            logger.info("Not enough teams to schedule (%d)", len(self.team_ids))
            return []

        total_slots = self.season_weeks * self.games_per_week
        all_matchups = self.generate_extended_matchups(self.team_ids, total_slots)
        weekly_schedule = self.distribute_matchups_across_weeks(all_matchups, self.team_ids)

        schedule: List[ScheduleGame] = []
        for week_index, week_matchups in enumerate(weekly_schedule):
            schedule.extend(self.assign_slots(week_index + 1, week_matchups))

        logger.info(
            "Generated %d games for %d teams over %d weeks (%d games/week)",
            len(schedule), len(self.team_ids), self.season_weeks, self.games_per_week
        )
        return schedule

    def generate_round_robin_matchups(self, team_ids: List[str]) -> List[Matchup]:
        """
        Pair every team with every other team exactly once.
        Home/away alternates with each pairing to keep the split even.
        """
        matchups: List[Matchup] = []

        for i in range(len(team_ids)):
            for j in range(i + 1, len(team_ids)):
                if len(matchups) % 2 == 0:
                    matchups.append(Matchup(home=team_ids[i], away=team_ids[j]))
                else:
                    matchups.append(Matchup(home=team_ids[j], away=team_ids[i]))

        return matchups

    def generate_extended_matchups(self, team_ids: List[str], total_slots_needed: int) -> List[Matchup]:
        """
        Repeat the round robin until the season's slots are covered.

        Each added round flips home/away relative to the round before it.

        Args:
            team_ids: Active team ids
            total_slots_needed: season weeks x games per week

        Returns:
            Exactly ``total_slots_needed`` matchups, or fewer if the base
            round robin is empty.
        """
        single_round = self.generate_round_robin_matchups(team_ids)
        if not single_round:
            return []

        all_matchups = list(single_round)
        previous_round = single_round

        while len(all_matchups) < total_slots_needed:
            next_round = [matchup.swapped() for matchup in previous_round]
            all_matchups.extend(next_round)
            previous_round = next_round

        return all_matchups[:max(0, total_slots_needed)]

    def distribute_matchups_across_weeks(
        self,
        matchups: List[Matchup],
        team_ids: List[str]
    ) -> List[List[Matchup]]:
        """
        Assign matchups to weeks 1..season_weeks.

        Within a week a team plays at most once and at most ``games_per_week``
        games are placed. Candidates whose teams rested longest are picked
        first. A week stops filling early when every remaining matchup clashes
        with a team already playing that week.

        Returns:
            One list of matchups per week, in week order.
        """
        weekly_schedule: List[List[Matchup]] = []
        remaining_matchups = list(matchups)
        team_last_played_week: Dict[str, int] = {team_id: 0 for team_id in team_ids}
        team_bye_weeks: Dict[str, int] = {team_id: 0 for team_id in team_ids}

        for week in range(1, self.season_weeks + 1):
            week_games: List[Matchup] = []
            playing_this_week: Set[str] = set()

            games_scheduled = 0
            attempts = 0
            max_attempts = len(remaining_matchups) * 2

            while (games_scheduled < self.games_per_week
                   and remaining_matchups
                   and attempts < max_attempts):
                attempts += 1

                best_index = self.find_best_matchup_for_week(
                    remaining_matchups,
                    playing_this_week,
                    team_last_played_week,
                    week
                )
                if best_index is None:
                    break

                matchup = remaining_matchups.pop(best_index)
                week_games.append(matchup)
                playing_this_week.add(matchup.home)
                playing_this_week.add(matchup.away)
                team_last_played_week[matchup.home] = week
                team_last_played_week[matchup.away] = week
                games_scheduled += 1

            for team_id in team_ids:
                if team_id not in playing_this_week:
                    team_bye_weeks[team_id] += 1

            if games_scheduled < self.games_per_week and remaining_matchups:
                logger.debug(
                    "Week %d filled %d of %d slots; %d matchups left in pool",
                    week, games_scheduled, self.games_per_week, len(remaining_matchups)
                )

            weekly_schedule.append(week_games)

        logger.debug("Bye weeks per team: %s", team_bye_weeks)
        return weekly_schedule

    def find_best_matchup_for_week(
        self,
        available_matchups: List[Matchup],
        playing_this_week: Set[str],
        team_last_played_week: Dict[str, int],
        current_week: int
    ) -> Optional[int]:
        """
        Pick the index of the most rested matchup that fits this week.

        Score = weeks since home last played + weeks since away last played +
        jitter in [0, MAX_REST_JITTER).

        Returns:
            Index into ``available_matchups``, or None if nothing fits.
        """
        best_index = None
        best_score = None

        for index, matchup in enumerate(available_matchups):
            if matchup.home in playing_this_week or matchup.away in playing_this_week:
                continue

            home_rest_weeks = current_week - team_last_played_week.get(matchup.home, 0)
            away_rest_weeks = current_week - team_last_played_week.get(matchup.away, 0)
            score = home_rest_weeks + away_rest_weeks
            score += self.rng.random() * MAX_REST_JITTER

            if best_score is None or score > best_score:
                best_score = score
                best_index = index

        return best_index

    def assign_slots(self, week: int, week_matchups: List[Matchup]) -> List[ScheduleGame]:
        """Fill every start time on field 1, then field 2, and so on."""
        games = []
        slots_per_field = len(self.game_start_times)
        if slots_per_field == 0:
            return games

        for game_index, matchup in enumerate(week_matchups):
            field_number = game_index // slots_per_field + 1
            time_slot = game_index % slots_per_field
            games.append(ScheduleGame(
                home_team_id=matchup.home,
                away_team_id=matchup.away,
                week=week,
                start_time=self.game_start_times[time_slot],
                field_number=field_number
            ))

        return games

    def get_schedule_stats(self, schedule: List[ScheduleGame]) -> ScheduleStats:
        """
        Calculate statistics for a generated schedule.

        Every active team appears in both maps, with zero for teams that
        never play. Games naming teams outside the active list still count
        toward ``total_games``.
        """
        games_per_team: Dict[str, int] = {team_id: 0 for team_id in self.team_ids}
        team_weeks_playing: Dict[str, Set[int]] = {team_id: set() for team_id in self.team_ids}

        for game in schedule:
            for team_id in (game.home_team_id, game.away_team_id):
                if team_id in games_per_team:
                    games_per_team[team_id] += 1
                    team_weeks_playing[team_id].add(game.week)

        bye_weeks_per_team = {
            team_id: self.season_weeks - len(weeks)
            for team_id, weeks in team_weeks_playing.items()
        }

        game_counts = list(games_per_team.values())

        return ScheduleStats(
            total_games=len(schedule),
            games_per_team=games_per_team,
            bye_weeks_per_team=bye_weeks_per_team,
            max_games_per_team=max(game_counts) if game_counts else 0,
            min_games_per_team=min(game_counts) if game_counts else 0
        )

    def validate_scheduling_parameters(self) -> List[str]:
        """
        Check whether a schedule can be generated with the current parameters.

        Returns:
            Human-readable issues; an empty list means the parameters are valid.
        """
        issues = []

        if len(self.team_ids) < MIN_TEAMS_PER_SCHEDULE:
            issues.append("Need at least 2 teams to create a schedule")

        if self.available_fields < 1:
            issues.append("Need at least 1 field available")

        if len(self.game_start_times) < 1:
            issues.append("Need at least 1 game start time")

        if self.season_weeks < 1:
            issues.append("Season must be at least 1 week long")

        return issues
