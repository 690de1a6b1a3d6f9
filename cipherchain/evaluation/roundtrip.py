"""Algebraic unit testing: roundtrip verification P = D(E(P, K), K).

Generates randomized (text, key) vectors per stage engine and verifies that
decryption inverts encryption for every vector. Classical engines are
compared against the normalized plaintext, since they drop non-letters.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import logging
import random
import string
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ..cipher.classical import normalize_text
from ..cipher.registry import EngineRegistry

logger = logging.getLogger(__name__)

_PRINTABLE = string.ascii_letters + string.digits + string.punctuation + " "


@dataclass
class RoundtripFailure:
    """Details of a single failed roundtrip test vector."""
    vector_index: int
    plaintext: str
    key: str
    ciphertext: str
    decrypted: str           # What decrypt returned (should equal expected plaintext)
    error: Optional[str]     # Exception message if decrypt/encrypt threw


@dataclass
class RoundtripResult:
    """Aggregate result of roundtrip testing for one stage engine."""
    stage_type: str
    engine_name: str
    total_vectors: int
    passed: int
    failed: int
    failures: List[RoundtripFailure] = field(default_factory=list)
    elapsed_seconds: float = 0.0
    seed: int = 1337

    @property
    def success_rate(self) -> float:
        return self.passed / self.total_vectors if self.total_vectors > 0 else 0.0

    @property
    def is_perfect(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def summary(self) -> str:
        status = "PASS" if self.is_perfect else "FAIL"
        return (
            f"[{status}] {self.engine_name} ({self.stage_type}): "
            f"{self.passed}/{self.total_vectors} vectors passed "
            f"({self.elapsed_seconds:.2f}s)"
        )


def _rand_text(rng: random.Random, alphabet: str, lo: int, hi: int) -> str:
    return "".join(rng.choice(alphabet) for _ in range(rng.randint(lo, hi)))


def _make_vector(rng: random.Random, stage_type: str) -> Dict[str, Any]:
    if stage_type == "block":
        key_format = rng.choice(["text", "hex"])
        if key_format == "hex":
            key = bytes(rng.randrange(0, 256) for _ in range(rng.randint(1, 20))).hex()
        else:
            key = _rand_text(rng, _PRINTABLE, 0, 24)
        return {
            "text": _rand_text(rng, _PRINTABLE, 0, 64),
            "parameters": {"key": key, "keyFormat": key_format},
        }
    return {
        "text": _rand_text(rng, _PRINTABLE, 0, 64),
        "parameters": {"key": _rand_text(rng, string.ascii_letters, 1, 12)},
    }


def _expected_plaintext(text: str, stage_type: str, block_mode: str) -> str:
    if stage_type != "block":
        return normalize_text(text)
    if block_mode == "single":
        # Only the first block survives; printable text never looks like padding.
        return text[:16]
    return text


def run_roundtrip_tests(
    stage_type: str,
    *,
    num_vectors: int = 200,
    seed: int = 1337,
    max_failures_recorded: int = 10,
    registry: Optional[EngineRegistry] = None,
) -> RoundtripResult:
    """Run roundtrip verification across many random vectors.

    Args:
        stage_type: Engine to test ("block", "running-key", "repeating-key").
        num_vectors: Number of random (text, key) pairs to test.
        seed: Random seed for deterministic reproducibility.
        max_failures_recorded: Maximum number of failure details to keep.
        registry: Optional engine registry; uses default if not provided.

    Returns:
        RoundtripResult with pass/fail counts and failure details.
    """
    reg = registry or EngineRegistry()
    engine = reg.get(stage_type)

    rng = random.Random(seed)
    passed = 0
    failed = 0
    failures: List[RoundtripFailure] = []

    start = time.perf_counter()

    for i in range(num_vectors):
        vec = _make_vector(rng, stage_type)
        text, params = vec["text"], vec["parameters"]
        expected = _expected_plaintext(text, stage_type, reg.block_mode)

        try:
            ct = engine.apply(text, params, "encrypt")
            rt = engine.apply(ct, params, "decrypt")

            if rt == expected:
                passed += 1
            else:
                failed += 1
                if len(failures) < max_failures_recorded:
                    failures.append(RoundtripFailure(
                        vector_index=i,
                        plaintext=text,
                        key=params["key"],
                        ciphertext=ct,
                        decrypted=rt,
                        error=None,
                    ))
        except Exception as exc:
            failed += 1
            if len(failures) < max_failures_recorded:
                failures.append(RoundtripFailure(
                    vector_index=i,
                    plaintext=text,
                    key=params["key"],
                    ciphertext="<error>",
                    decrypted="<error>",
                    error=f"{type(exc).__name__}: {exc}",
                ))

    elapsed = time.perf_counter() - start
    logger.info("Roundtrip %s: %d/%d passed", stage_type, passed, num_vectors)

    return RoundtripResult(
        stage_type=stage_type,
        engine_name=engine.name,
        total_vectors=num_vectors,
        passed=passed,
        failed=failed,
        failures=failures,
        elapsed_seconds=round(elapsed, 4),
        seed=seed,
    )


def run_all_engines(
    *,
    num_vectors: int = 200,
    seed: int = 1337,
    registry: Optional[EngineRegistry] = None,
    progress_callback: Optional[Callable[[str, int, int], None]] = None,
) -> List[RoundtripResult]:
    """Run roundtrip tests for every registered engine, sorted by stage type."""
    reg = registry or EngineRegistry()
    engines = reg.list()
    results: List[RoundtripResult] = []

    for idx, engine in enumerate(engines):
        if progress_callback:
            progress_callback(engine.stage_type, idx, len(engines))
        results.append(run_roundtrip_tests(
            engine.stage_type,
            num_vectors=num_vectors,
            seed=seed,
            registry=reg,
        ))

    return sorted(results, key=lambda r: r.stage_type)
