"""
Exercise Tracker Backend — Middleware Package
==============================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → [Unexpected Error] → Route Handler

    1. Request ID: correlation id for every log line of the request
    2. Logging: one access line per request, with status and duration
    3. CORS: FastAPI's CORSMiddleware (cross-origin requests permitted)
    4. Unexpected Error: unhandled exceptions become 400 "Error: ..." here,
       so even those responses carry CORS and X-Request-ID headers
"""
