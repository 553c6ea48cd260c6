# Middleware package init
"""
Pokedex Backend — Middleware Package
======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [Preflight] → [CORS] → [Body Size Limit] → Route Handler

    1. Request ID: Generate correlation ID for logging and tracing
    2. Logging: Log request details with the generated request ID,
       including requests rejected further down the chain
    3. Preflight: Answer every OPTIONS with 200 and the CORS headers
    4. CORS: FastAPI's CORSMiddleware adds Access-Control-Allow-Origin to
       actual responses, so 413 rejections still carry it
    5. Body Size Limit: Reject oversized bodies, declared or streamed
"""
