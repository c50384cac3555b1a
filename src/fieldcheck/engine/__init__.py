"""Record processing engine: orchestration, phone rewrites, realignment, binding."""

from fieldcheck.engine.binding import bind_field, bind_fields, bind_payload, bind_payloads
from fieldcheck.engine.orchestrator import ValidatorEngine, WritePlan
from fieldcheck.engine.realignment import Correction, RealignmentCandidate, realign
from fieldcheck.engine.rewrite import RewriteOutcome, run_phone_rewrite

__all__ = [
    "Correction",
    "RealignmentCandidate",
    "RewriteOutcome",
    "ValidatorEngine",
    "WritePlan",
    "bind_field",
    "bind_fields",
    "bind_payload",
    "bind_payloads",
    "realign",
    "run_phone_rewrite",
]
