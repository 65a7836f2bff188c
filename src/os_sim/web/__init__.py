"""Browser-facing JSON API for the simulator.

This package provides a Flask application that exposes the engines and
the shell over HTTP.  It is an **optional** extra — install with::

    pip install os-sim[web]

The ``create_app`` factory in ``app.py`` serves:

- ``POST /api/memory`` — validate and run a page-replacement workload.
- ``POST /api/disk`` — validate and run a disk-scheduling workload.
- ``GET /api/comparison`` — latest summary per algorithm.
- ``POST /api/execute`` — execute a shell command and return its output.
"""
