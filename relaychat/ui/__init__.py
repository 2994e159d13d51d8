"""NiceGUI interface and client-side chat logic.

Responsibilities:
    - Session store: turn history, pending input, loading, error, connectivity
    - Transport client: turn encoding and the /chat and /ping calls
    - Wake-up prober: liveness polling until the relay is ready
    - Pages: chat view at / and the wake-up countdown at /wakeup

The pages are a presentation layer over the store; all I/O goes through
the transport client.
"""
