"""
Static preview server for the output directory.
"""

import functools
import http.server
import threading

DEFAULT_HOST = "127.0.0.1"


class _ThreadedHTTPServer(http.server.ThreadingHTTPServer):
    daemon_threads = True


class _QuietHandler(http.server.SimpleHTTPRequestHandler):
    def log_message(self, format, *args):  # silence default request logging
        return


def serve(directory, port, host=DEFAULT_HOST, verbose=False):
    """
    Serve `directory` on host:port from a background thread.

    Returns the running server; call shutdown() and server_close() to stop.
    Pass port 0 to bind an ephemeral port (see server.server_address).
    """
    handler_cls = http.server.SimpleHTTPRequestHandler if verbose else _QuietHandler
    handler = functools.partial(handler_cls, directory=directory)
    server = _ThreadedHTTPServer((host, port), handler)

    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()

    bound_host, bound_port = server.server_address[:2]
    print(f"  Serving {directory} at http://{bound_host}:{bound_port}/")
    return server
