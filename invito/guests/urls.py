INVITE_GUEST_URL = "/api/guests"
UPDATE_RSVP_URL = "/api/guests/rsvp"
GET_GUEST_INFO_URL = "/api/guests/rsvp/{invite_code}"
REMOVE_GUEST_URL = "/api/guests/{guest_id}"
