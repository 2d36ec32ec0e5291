"""Member portal package.

This package is organized by feature modules (auth, profile, history, ...)
with a thin Flask controller layer over service/repository layers, reading
the existing ChurchCRM membership tables.
"""
