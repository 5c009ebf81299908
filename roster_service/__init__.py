"""
Roster Service - Team formation and check-in for tournaments

Responsibilities:
- Team rosters (create team, join by invite code, captain adds/removes players)
- Trust edges from players who join by invite code to their captain
- Check-in window and organizer check-out
- Organizer seeding of teams
- Tournament lookup by organizer and tournament URL names
"""
