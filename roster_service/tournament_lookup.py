from typing import Dict, Optional

from . import permissions
from .errors import NotFound
from .models import Organization, Team, Tournament
from .seeding import sort_teams_by_seed
from .store import RosterStore


def twitter_to_url(twitter: Optional[str]) -> Optional[str]:
    if not twitter:
        return twitter
    return f"https://twitter.com/{twitter}"


def discord_invite_to_url(discord_invite: str) -> str:
    return f"https://discord.com/invite/{discord_invite}"


def organizer_to_dict(organization: Organization) -> Dict:
    return {
        'id': organization.id,
        'name': organization.name,
        'name_for_url': organization.name_for_url,
        'twitter': twitter_to_url(organization.twitter),
        'discord_invite': discord_invite_to_url(organization.discord_invite),
    }


class TournamentLookup:
    """Read side: resolves tournaments by their URL names for display."""

    def __init__(self, store: RosterStore = None):
        self.store = store or RosterStore()

    def _find(self, organization_name_for_url: str, tournament_name_for_url: str) -> Tournament:
        organization_name_for_url = organization_name_for_url.lower()
        for tournament in self.store.tournaments_by_name_for_url(tournament_name_for_url):
            if tournament.organizer.name_for_url == organization_name_for_url:
                return tournament
        raise NotFound("No tournament found")

    def find_tournament_by_name_for_url(
        self,
        organization_name_for_url: str,
        tournament_name_for_url: str
    ) -> Dict:
        """Tournament with its organizer links and teams in seed order. Invite codes are withheld."""
        tournament = self._find(organization_name_for_url, tournament_name_for_url)

        data = tournament.to_dict()
        data['organizer'] = organizer_to_dict(tournament.organizer)
        data['teams'] = [
            team.to_dict() for team in sort_teams_by_seed(tournament.teams, tournament.seeds)
        ]
        return data

    def find_tournament_with_invite_codes(
        self,
        organization_name_for_url: str,
        tournament_name_for_url: str,
        user_id: int
    ) -> Dict:
        """Organizer view: every team including its invite code."""
        tournament = self._find(organization_name_for_url, tournament_name_for_url)
        if not permissions.is_tournament_admin(user_id, tournament.organizer):
            raise NotFound("No tournament found")

        data = tournament.to_dict()
        data['teams'] = [
            team.to_dict(include_invite_code=True)
            for team in sort_teams_by_seed(tournament.teams, tournament.seeds)
        ]
        return data

    def own_team_with_invite_code(
        self,
        organization_name_for_url: str,
        tournament_name_for_url: str,
        user_id: int
    ) -> Team:
        """The team ``user_id`` captains in the tournament."""
        tournament = self._find(organization_name_for_url, tournament_name_for_url)

        for team in tournament.teams:
            if permissions.is_captain(team, user_id):
                return team
        raise NotFound("No own team found")
