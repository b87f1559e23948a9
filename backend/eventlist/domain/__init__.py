from eventlist.domain.models import Event, EventField, NewEvent

__all__ = ["Event", "EventField", "NewEvent"]
