SUBMIT_RSVP_URL = "/rsvp"
SEND_INVITE_URL = "/send-invite"

LIST_ATTENDEES_URL = "/admin/attendees"
SEARCH_ATTENDEES_URL = "/admin/attendees/search"
UPDATE_STATUS_URL = "/admin/attendees/{attendee_id}/status"
CHECK_IN_URL = "/admin/check-in"
RECONCILE_INVITES_URL = "/admin/invites/reconcile"
