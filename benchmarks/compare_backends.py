from __future__ import annotations

import argparse
from datetime import datetime
import glob as stdlib_glob
import importlib
import json
import os
from pathlib import Path
import statistics
import tempfile
import time
import tracemalloc
from dataclasses import dataclass
from typing import Callable

import pathglob


@dataclass
class CaseResult:
    backend: str
    case: str
    seconds_mean: float
    seconds_min: float
    seconds_max: float
    peak_kib_mean: float


def _run_with_memory(fn: Callable[[], None]) -> tuple[float, float]:
    tracemalloc.start()
    start = time.perf_counter()
    fn()
    elapsed = time.perf_counter() - start
    _, peak = tracemalloc.get_traced_memory()
    tracemalloc.stop()
    return elapsed, peak / 1024.0


def build_tree(root: str, dir_count: int, files_per_dir: int, depth: int) -> int:
    """Create *dir_count* branches of *depth* levels, returning the .css count."""
    css = 0
    for d in range(dir_count):
        current = os.path.join(root, f"d{d:03d}")
        for level in range(depth):
            os.makedirs(current, exist_ok=True)
            for i in range(files_per_dir):
                ext = "css" if i % 2 == 0 else "js"
                with open(os.path.join(current, f"f{i:03d}.{ext}"), "w") as f:
                    f.write("x")
                css += ext == "css"
            current = os.path.join(current, f"l{level}")
    return css


def _validate(backend: str, found: int, expected: int) -> None:
    if found != expected:
        raise RuntimeError(
            f"{backend} benchmark validation failed: {found} != {expected}"
        )


def bench_pathglob_recursive(root: str, expected: int) -> None:
    _validate("pathglob", len(pathglob.glob(root + "/**/*.css")), expected)


def bench_stdlib_recursive(root: str, expected: int) -> None:
    found = sorted(stdlib_glob.glob(root + "/**/*.css", recursive=True))
    _validate("glob", len(found), expected)


def bench_wcmatch_recursive(root: str, expected: int) -> None:
    wcglob = importlib.import_module("wcmatch.glob")
    found = sorted(wcglob.glob(root + "/**/*.css", flags=wcglob.GLOBSTAR))
    _validate("wcmatch", len(found), expected)


def bench_pathglob_match(paths: list[str], expected: int) -> None:
    compiled = pathglob.compile("/srv/**/*.{css,scss}")
    _validate("pathglob", sum(1 for p in paths if compiled.match(p)), expected)


def bench_wcmatch_match(paths: list[str], expected: int) -> None:
    wcglob = importlib.import_module("wcmatch.glob")
    flags = wcglob.GLOBSTAR | wcglob.BRACE
    found = sum(1 for p in paths if wcglob.globmatch(p, "/srv/**/*.{css,scss}", flags=flags))
    _validate("wcmatch", found, expected)


def _fmt_ms(seconds: float) -> str:
    return f"{seconds * 1000.0:.2f}"


def _fmt_kib(peak_kib: float) -> str:
    return f"{peak_kib:.1f}"


def run_case(
    backend: str,
    case: str,
    fn: Callable[[], None],
    repeat: int,
    warmup: int,
) -> CaseResult:
    for _ in range(warmup):
        fn()

    elapsed_list: list[float] = []
    peak_list: list[float] = []
    for _ in range(repeat):
        elapsed, peak_kib = _run_with_memory(fn)
        elapsed_list.append(elapsed)
        peak_list.append(peak_kib)

    return CaseResult(
        backend=backend,
        case=case,
        seconds_mean=statistics.mean(elapsed_list),
        seconds_min=min(elapsed_list),
        seconds_max=max(elapsed_list),
        peak_kib_mean=statistics.mean(peak_list),
    )


def print_table(results: list[CaseResult]) -> None:
    print("| Case | Backend | mean(ms) | min(ms) | max(ms) | peak KiB (mean) |")
    print("|---|---:|---:|---:|---:|---:|")
    for r in results:
        print(
            f"| {r.case} | {r.backend} | {_fmt_ms(r.seconds_mean)} |"
            f" {_fmt_ms(r.seconds_min)} | {_fmt_ms(r.seconds_max)} | {_fmt_kib(r.peak_kib_mean)} |"
        )


def _results_to_dict(results: list[CaseResult]) -> list[dict[str, float | str]]:
    return [
        {
            "backend": r.backend,
            "case": r.case,
            "seconds_mean": r.seconds_mean,
            "seconds_min": r.seconds_min,
            "seconds_max": r.seconds_max,
            "peak_kib_mean": r.peak_kib_mean,
        }
        for r in results
    ]


def _resolve_output_path(raw: str, ext: str) -> Path:
    if raw != "auto":
        return Path(raw)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_dir = Path("benchmarks") / "results"
    out_dir.mkdir(parents=True, exist_ok=True)
    return out_dir / f"benchmark_{ts}.{ext}"


def _has_wcmatch() -> bool:
    try:
        importlib.import_module("wcmatch.glob")
    except ImportError:
        return False
    return True


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Benchmark pathglob vs stdlib glob vs wcmatch"
    )
    parser.add_argument("--repeat", type=int, default=5)
    parser.add_argument("--warmup", type=int, default=1)
    parser.add_argument("--dirs", type=int, default=20)
    parser.add_argument("--files-per-dir", type=int, default=20)
    parser.add_argument("--depth", type=int, default=5)
    parser.add_argument("--match-paths", type=int, default=50000)
    parser.add_argument("--json", action="store_true")
    parser.add_argument(
        "--save-json", default="", help="Save json report path (or 'auto')"
    )
    args = parser.parse_args()

    with_wcmatch = _has_wcmatch()
    results: list[CaseResult] = []

    with tempfile.TemporaryDirectory() as td:
        root = Path(td).as_posix()
        expected = build_tree(root, args.dirs, args.files_per_dir, args.depth)

        results.append(
            run_case(
                "pathglob",
                "recursive_glob",
                lambda: bench_pathglob_recursive(root, expected),
                args.repeat,
                args.warmup,
            )
        )
        results.append(
            run_case(
                "glob(stdlib)",
                "recursive_glob",
                lambda: bench_stdlib_recursive(root, expected),
                args.repeat,
                args.warmup,
            )
        )
        if with_wcmatch:
            results.append(
                run_case(
                    "wcmatch",
                    "recursive_glob",
                    lambda: bench_wcmatch_recursive(root, expected),
                    args.repeat,
                    args.warmup,
                )
            )

    exts = ("css", "scss", "js", "png")
    paths = [
        f"/srv/app{i % 7}/static/{i % 13}/f{i}.{exts[i % 4]}"
        for i in range(args.match_paths)
    ]
    matching = sum(1 for p in paths if p.endswith((".css", ".scss")))

    results.append(
        run_case(
            "pathglob",
            "match_many",
            lambda: bench_pathglob_match(paths, matching),
            args.repeat,
            args.warmup,
        )
    )
    if with_wcmatch:
        results.append(
            run_case(
                "wcmatch",
                "match_many",
                lambda: bench_wcmatch_match(paths, matching),
                args.repeat,
                args.warmup,
            )
        )

    if args.json:
        print(json.dumps(_results_to_dict(results), indent=2))
        return

    print_table(results)

    if args.save_json:
        json_path = _resolve_output_path(args.save_json, "json")
        json_path.parent.mkdir(parents=True, exist_ok=True)
        json_path.write_text(
            json.dumps(_results_to_dict(results), indent=2), encoding="utf-8"
        )
        print(f"Saved JSON report: {json_path}")


if __name__ == "__main__":
    main()
