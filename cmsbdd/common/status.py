"""
Step Outcome Codes

Outcomes a step can end with. A pending step is not a failure: it flags a
sentence the step catalog does not implement yet.
"""

PASSED = "passed"
FAILED = "failed"
PENDING = "pending"

ALL = (PASSED, FAILED, PENDING)
