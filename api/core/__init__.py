"""
Shared, cross-cutting code for the API.

`core/` should contain small building blocks that feature packages use
(DB wiring, logging). Keep feature-specific SQL and business rules
in the corresponding feature package (e.g. `swift_codes/`).
"""
