EVENTS_URL = "/api/events"
GET_EVENT_URL = "/api/events/{event_id}"
