from .team_store import TeamStore, WriteCycle, make_team_store

__all__ = ["TeamStore", "WriteCycle", "make_team_store"]
