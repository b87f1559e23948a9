from eventlist.models.event import Event

__all__ = ["Event"]
