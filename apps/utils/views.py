"""Serves the built single-page dashboard."""

from __future__ import annotations

from django.conf import settings
from django.core.exceptions import SuspiciousFileOperation
from django.http import FileResponse, Http404
from django.views.decorators.http import require_GET
from django.views.static import serve


@require_GET
def spa_shell(request, path: str = ""):
    """Return a built asset when one exists at ``path``, else ``index.html``.

    Any other route belongs to the front-end router, so it gets the shell.
    """
    dist_dir = settings.SPA_DIST_DIR
    if path:
        try:
            return serve(request, path, document_root=dist_dir)
        except (Http404, SuspiciousFileOperation):
            pass

    index_file = dist_dir / "index.html"
    if not index_file.is_file():
        raise Http404("Front-end build not found.")
    return FileResponse(index_file.open("rb"), content_type="text/html")
