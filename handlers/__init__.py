"""
handlers/ - Presentation Layer
================================
HTTP handlers. Each handler decodes the request, delegates to the
ReviewService, and encodes the JSON response.
No business logic lives here.
"""
