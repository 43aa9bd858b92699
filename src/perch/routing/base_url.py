"""Base URL detection from a WSGI-style environ.

The router itself never inspects the environment; callers that mount an
application below a script path pass the detected prefix to
``Router.set_base_url()``::

    router.set_base_url(base_url_from_environ(environ))
"""

import posixpath
from collections.abc import Mapping


def base_url_from_environ(environ: Mapping[str, str]) -> str:
    """Return the URL prefix an application is mounted under.

    - If the request URI starts with the script name, the script name is
      the base (``/index.php/users`` → ``/index.php``).
    - Otherwise the script's directory is the base, unless that directory
      is the root (``/app/index.php`` serving ``/app/users`` → ``/app``).
    """
    script_name = environ.get("SCRIPT_NAME", "")
    request_uri = environ.get("REQUEST_URI", "")
    if script_name and request_uri.startswith(script_name):
        return script_name

    directory = posixpath.dirname(script_name)
    if len(directory) > 1:
        return directory
    return ""
