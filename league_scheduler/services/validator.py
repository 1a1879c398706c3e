"""
Schedule validation module for the League Scheduling System.
Audits generated schedules against hard and soft constraints.
"""

from typing import List, Optional
from collections import defaultdict

from league_scheduler.models import (
    LeagueScheduleConfig, ScheduleGame, SchedulingConstraint,
    ScheduleValidationResult, TeamScheduleStats
)
from league_scheduler.core.config import (
    MAX_HOME_AWAY_IMBALANCE, MAX_BYE_WEEK_SPREAD, PENALTY_WEIGHTS
)
from league_scheduler.core.logging_config import get_logger

logger = get_logger(__name__)


class ScheduleValidator:
    """
    Validates weekly league schedules.
    Checks both hard constraints (must be satisfied) and soft constraints (preferences).
    """

    def validate_schedule(
        self,
        schedule: List[ScheduleGame],
        team_ids: List[str],
        config: LeagueScheduleConfig
    ) -> ScheduleValidationResult:
        """
        Validate a complete schedule against all constraints.

        Args:
            schedule: The generated games
            team_ids: Active team ids the schedule was built for
            config: League schedule config used to generate it

        Returns:
            ScheduleValidationResult with all violations found
        """
        result = ScheduleValidationResult(is_valid=True)

        self._check_self_matchups(schedule, result)
        self._check_unknown_teams(schedule, team_ids, result)
        self._check_week_range(schedule, config, result)
        self._check_team_double_booking(schedule, result)
        self._check_slot_conflicts(schedule, result)
        self._check_week_capacity(schedule, config, result)
        self._check_home_away_balance(schedule, team_ids, result)
        self._check_bye_week_balance(schedule, team_ids, config, result)

        logger.info(
            "Validation complete: valid=%s hard=%d soft=%d penalty=%.2f",
            result.is_valid,
            len(result.hard_constraint_violations),
            len(result.soft_constraint_violations),
            result.total_penalty_score
        )
        for violation in result.hard_constraint_violations[:10]:
            logger.warning("%s: %s", violation.constraint_type, violation.description)

        return result

    def _check_self_matchups(self, schedule: List[ScheduleGame], result: ScheduleValidationResult):
        for game in schedule:
            if game.home_team_id == game.away_team_id:
                result.add_violation(SchedulingConstraint(
                    constraint_type="self_matchup",
                    severity="hard",
                    description=f"{game.home_team_id} is scheduled against itself in week {game.week}",
                    affected_teams=[game.home_team_id],
                    affected_games=[game],
                    penalty_score=PENALTY_WEIGHTS["self_matchup"]
                ))

    def _check_unknown_teams(self, schedule: List[ScheduleGame], team_ids: List[str], result: ScheduleValidationResult):
        """Check that every game only names active league teams."""
        known = set(team_ids)
        for game in schedule:
            unknown = [t for t in (game.home_team_id, game.away_team_id) if t not in known]
            if unknown:
                result.add_violation(SchedulingConstraint(
                    constraint_type="unknown_team",
                    severity="hard",
                    description=f"Week {game.week} game names inactive or unknown team(s): {', '.join(unknown)}",
                    affected_teams=unknown,
                    affected_games=[game],
                    penalty_score=PENALTY_WEIGHTS["unknown_team"]
                ))

    def _check_week_range(self, schedule: List[ScheduleGame], config: LeagueScheduleConfig, result: ScheduleValidationResult):
        for game in schedule:
            if game.week < 1 or game.week > config.season_weeks:
                result.add_violation(SchedulingConstraint(
                    constraint_type="week_out_of_range",
                    severity="hard",
                    description=f"Game {game.game_key} is in week {game.week} (season has {config.season_weeks} weeks)",
                    affected_teams=[game.home_team_id, game.away_team_id],
                    affected_games=[game],
                    penalty_score=PENALTY_WEIGHTS["week_out_of_range"]
                ))

    def _check_team_double_booking(self, schedule: List[ScheduleGame], result: ScheduleValidationResult):
        """
        Check for teams scheduled more than once in the same week.
        A team gets at most one game per league night.
        """
        appearances = defaultdict(list)
        for game in schedule:
            appearances[(game.week, game.home_team_id)].append(game)
            appearances[(game.week, game.away_team_id)].append(game)

        for (week, team_id), team_games in appearances.items():
            if len(team_games) > 1:
                result.add_violation(SchedulingConstraint(
                    constraint_type="team_double_booking",
                    severity="hard",
                    description=f"Team {team_id} is scheduled {len(team_games)} times in week {week}",
                    affected_teams=[team_id],
                    affected_games=team_games,
                    penalty_score=PENALTY_WEIGHTS["team_double_booking"]
                ))

    def _check_slot_conflicts(self, schedule: List[ScheduleGame], result: ScheduleValidationResult):
        """Check for two games on the same field at the same time."""
        slot_games = defaultdict(list)
        for game in schedule:
            slot_games[(game.week, game.field_number, game.start_time)].append(game)

        for (week, field_number, start_time), games in slot_games.items():
            if len(games) > 1:
                result.add_violation(SchedulingConstraint(
                    constraint_type="slot_conflict",
                    severity="hard",
                    description=f"{len(games)} games on field {field_number} at {start_time} in week {week}",
                    affected_games=games,
                    penalty_score=PENALTY_WEIGHTS["slot_conflict"]
                ))

    def _check_week_capacity(self, schedule: List[ScheduleGame], config: LeagueScheduleConfig, result: ScheduleValidationResult):
        games_by_week = defaultdict(list)
        for game in schedule:
            games_by_week[game.week].append(game)

        for week, games in sorted(games_by_week.items()):
            if len(games) > config.games_per_week:
                result.add_violation(SchedulingConstraint(
                    constraint_type="week_over_capacity",
                    severity="hard",
                    description=f"Week {week} has {len(games)} games (capacity {config.games_per_week})",
                    affected_games=games,
                    penalty_score=PENALTY_WEIGHTS["week_over_capacity"]
                ))

    def _check_home_away_balance(self, schedule: List[ScheduleGame], team_ids: List[str], result: ScheduleValidationResult):
        """Check if teams have balanced home/away games (soft constraint)."""
        for team_id in team_ids:
            stats = self.get_team_stats(team_id, schedule)
            if stats.total_games == 0:
                continue

            imbalance = abs(stats.home_games - stats.away_games)
            if imbalance > MAX_HOME_AWAY_IMBALANCE:
                result.add_violation(SchedulingConstraint(
                    constraint_type="home_away_imbalance",
                    severity="soft",
                    description=f"{team_id} has imbalanced home/away: {stats.home_games} home, {stats.away_games} away",
                    affected_teams=[team_id],
                    penalty_score=imbalance * PENALTY_WEIGHTS["home_away_imbalance"]
                ))

    def _check_bye_week_balance(
        self,
        schedule: List[ScheduleGame],
        team_ids: List[str],
        config: LeagueScheduleConfig,
        result: ScheduleValidationResult
    ):
        """Check that bye weeks are spread evenly (soft constraint)."""
        if not team_ids:
            return

        byes = {
            team_id: self.get_team_stats(team_id, schedule, config.season_weeks).bye_weeks
            for team_id in team_ids
        }
        spread = max(byes.values()) - min(byes.values())

        if spread > MAX_BYE_WEEK_SPREAD:
            most = [t for t, count in byes.items() if count == max(byes.values())]
            result.add_violation(SchedulingConstraint(
                constraint_type="bye_week_imbalance",
                severity="soft",
                description=f"Bye weeks range from {min(byes.values())} to {max(byes.values())} (most: {', '.join(most)})",
                affected_teams=most,
                penalty_score=(spread - MAX_BYE_WEEK_SPREAD) * PENALTY_WEIGHTS["bye_week_imbalance"]
            ))

    def get_team_stats(
        self,
        team_id: str,
        schedule: List[ScheduleGame],
        season_weeks: Optional[int] = None
    ) -> TeamScheduleStats:
        """
        Calculate statistics for a team's schedule.

        Args:
            team_id: The team to analyze
            schedule: The complete schedule
            season_weeks: Season length, needed to count bye weeks

        Returns:
            TeamScheduleStats with all statistics
        """
        stats = TeamScheduleStats(team_id=team_id)

        for game in schedule:
            if not game.involves_team(team_id):
                continue

            stats.total_games += 1
            if game.is_home_game(team_id):
                stats.home_games += 1
            else:
                stats.away_games += 1

            stats.opponents.append(game.get_opponent(team_id))
            stats.games_by_week[game.week] = stats.games_by_week.get(game.week, 0) + 1

        if season_weeks is not None:
            stats.bye_weeks = season_weeks - len(stats.games_by_week)

        return stats

    def generate_schedule_report(
        self,
        schedule: List[ScheduleGame],
        team_ids: List[str],
        config: LeagueScheduleConfig
    ) -> str:
        """
        Generate a readable report of the schedule.

        Returns:
            Formatted report string
        """
        report = []
        report.append("=" * 80)
        report.append("SCHEDULE REPORT")
        report.append("=" * 80)
        report.append(f"Season: {config.season_weeks} weeks of {config.day_of_week.value}s from {config.start_date}")
        report.append(f"Fields: {config.available_fields}, Start times: {', '.join(config.game_start_times)}")
        report.append(f"Total Games: {len(schedule)}")
        report.append("")

        report.append("Games by Week:")
        games_by_week = defaultdict(list)
        for game in schedule:
            games_by_week[game.week].append(game)

        for week in range(1, config.season_weeks + 1):
            week_games = games_by_week.get(week, [])
            report.append(f"  Week {week}: {len(week_games)} games")
            for game in week_games:
                report.append(
                    f"    Field {game.field_number} {game.start_time}: "
                    f"{game.away_team_id} @ {game.home_team_id}"
                )
            playing = {t for g in week_games for t in (g.home_team_id, g.away_team_id)}
            bye_teams = [t for t in team_ids if t not in playing]
            if bye_teams:
                report.append(f"    Bye: {', '.join(bye_teams)}")
        report.append("")

        report.append("Team Statistics:")
        for team_id in team_ids:
            stats = self.get_team_stats(team_id, schedule, config.season_weeks)
            report.append(f"  {team_id}:")
            report.append(f"    Total Games: {stats.total_games}")
            report.append(f"    Home: {stats.home_games}, Away: {stats.away_games}")
            report.append(f"    Bye Weeks: {stats.bye_weeks}")

        report.append("=" * 80)

        return "\n".join(report)
