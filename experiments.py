# Huffman Text Codec
# experiments.py
# 10/19/26

"""
Huffman text codec experiments

Encodes synthetic and real text with the Huffman codec, checks every
round trip, and measures how close the code gets to the entropy bound

Outputs (in --outdir):
  - metrics.csv     (raw row per run per configuration)
  - summary.csv     (grouped mean/stdev)
  - *.png           (charts)

How to run:
  python experiments.py --outdir results --runs 5
  python experiments.py --outdir results --runs 3 --exp1_size_kb 128 --exp2_max_kb 512
  python experiments.py --input notes.txt README.md --show_tree

Notes:
  Bits are kept as a logical '0'/'1' string, so compression_ratio compares
  encoded bits against 8 bits per input character
"""

from __future__ import annotations

import argparse
import csv
import math
import random
import statistics
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

import matplotlib.pyplot as plt

import huffman as huff


# Utilities

def now_ns() -> int:
    return time.perf_counter_ns()

def ns_to_ms(ns: int) -> float:
    return ns / 1_000_000.0

def safe_mkdir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)

def read_text(path: Path) -> str:
    return Path(path).read_text(encoding="utf-8")

def shannon_entropy(ft: Dict[str, int]) -> float:
    """Entropy in bits per symbol of the empirical distribution"""
    total = sum(ft.values())
    if total == 0:
        return 0.0
    return -sum((c / total) * math.log2(c / total) for c in ft.values())

def fixed_width_bits(ft: Dict[str, int]) -> int:
    # Smallest fixed-length code for the same alphabet
    n = len(ft)
    width = math.ceil(math.log2(n)) if n > 1 else 0
    return width * sum(ft.values())


# Synthetic text generators

ENGLISH_CHARS = " etaoinshrdlcumwfgypbvkjxqETAOINSHRDLCUMWFGYPBVKJXQ.,\n"

def _sample_weighted(rng: random.Random, chars: str, weights: List[float], size: int) -> str:
    total = sum(weights)
    cdf = []
    acc = 0.0
    for w in weights:
        acc += w / total
        cdf.append(acc)

    out = []
    for _ in range(size):
        r = rng.random()
        lo, hi = 0, len(cdf) - 1
        while lo < hi:
            mid = (lo + hi) // 2
            if r <= cdf[mid]:
                hi = mid
            else:
                lo = mid + 1
        out.append(chars[lo])
    return "".join(out)

def gen_uniform(size: int, alphabet: int = 64, seed: int = 0) -> str:
    rng = random.Random(seed)
    chars = [chr(0x21 + i) for i in range(alphabet)]
    return "".join(rng.choice(chars) for _ in range(size))

def gen_repetitive(size: int, dominant: str = "A", dom_frac: float = 0.90, seed: int = 0) -> str:
    rng = random.Random(seed)
    others = [ch for ch in ENGLISH_CHARS if ch != dominant]
    return "".join(dominant if rng.random() < dom_frac else rng.choice(others) for _ in range(size))

def gen_zipf_like(size: int, alphabet: int = 48, s: float = 1.2, seed: int = 0) -> str:
    rng = random.Random(seed)
    chars = "".join(chr(0x21 + i) for i in range(alphabet))
    weights = [1.0 / ((i + 1) ** s) for i in range(alphabet)]
    return _sample_weighted(rng, chars, weights, size)

def gen_english_like(size: int, seed: int = 0) -> str:
    rng = random.Random(seed)
    weights = []
    for ch in ENGLISH_CHARS:
        if ch == ' ':
            weights.append(13.0)
        elif ch in ".,\n":
            weights.append(1.5)
        elif ch.lower() in "etaoinshrdlu":
            weights.append(6.0 if ch.islower() else 0.4)
        elif ch.lower() in "cmfwgypbvk":
            weights.append(2.5 if ch.islower() else 0.2)
        else:
            weights.append(1.2 if ch.islower() else 0.1)
    return _sample_weighted(rng, ENGLISH_CHARS, weights, size)

GENERATOR_REGISTRY: Dict[str, Callable[[int, int], str]] = {
    "uniform64": lambda size, seed: gen_uniform(size, alphabet=64, seed=seed),
    "uniform16": lambda size, seed: gen_uniform(size, alphabet=16, seed=seed),
    "zipf48": lambda size, seed: gen_zipf_like(size, alphabet=48, s=1.2, seed=seed),
    "repetitive90": lambda size, seed: gen_repetitive(size, dominant="A", dom_frac=0.90, seed=seed),
    "repetitive99": lambda size, seed: gen_repetitive(size, dominant="A", dom_frac=0.99, seed=seed),
    "english_like": lambda size, seed: gen_english_like(size, seed=seed),
}

def generate_dataset(name: str, size: int, seed: int) -> Tuple[str, str]:
    """
    Unknown dataset names fall back to uniform64 so the run does not fail
    halfway through; the returned name records the fallback
    """
    fn = GENERATOR_REGISTRY.get(name)
    if fn is None:
        return f"{name}_fallback_uniform64", gen_uniform(size, alphabet=64, seed=seed)
    return name, fn(size, seed)


# Experiment runner

@dataclass
class MetricRow:
    exp_name: str
    dataset_name: str
    text_length: int
    run_id: int
    unique_symbols: int

    build_tree_ms: float
    encode_ms: float
    decode_ms: float
    total_ms: float

    encoded_bits: int
    bits_per_symbol: float
    entropy_bits: float
    fixed_width_bits: int
    compression_ratio: float

    correctness_ok: int  # 1 or 0


def measure_codec(text: str) -> Tuple[MetricRow, str, Optional[huff.HuffmanNode]]:
    """Time tree build, encode and decode of one text; also return the bits and tree"""
    ft = huff.frequency_table(text)

    # Tree + code table
    t0 = now_ns()
    root = huff.build_huffman_tree(ft) if ft else None
    code_map = huff.generate_huffman_codes(root)
    t1 = now_ns()
    build_tree_ms = ns_to_ms(t1 - t0)

    # encode
    t2 = now_ns()
    bits = huff.huffman_encode(text, code_map)
    t3 = now_ns()
    encode_ms = ns_to_ms(t3 - t2)

    # decode
    t4 = now_ns()
    decoded = huff.decode(bits, root)
    t5 = now_ns()
    decode_ms = ns_to_ms(t5 - t4)

    n = len(text)
    row = MetricRow(
        exp_name="",
        dataset_name="",
        text_length=n,
        run_id=0,
        unique_symbols=len(ft),
        build_tree_ms=build_tree_ms,
        encode_ms=encode_ms,
        decode_ms=decode_ms,
        total_ms=build_tree_ms + encode_ms + decode_ms,
        encoded_bits=len(bits),
        bits_per_symbol=len(bits) / max(1, n),
        entropy_bits=shannon_entropy(ft),
        fixed_width_bits=fixed_width_bits(ft),
        compression_ratio=len(bits) / max(1, 8 * n),
        correctness_ok=1 if decoded == text else 0,
    )
    return row, bits, root


def run_one(text: str) -> MetricRow:
    return measure_codec(text)[0]


def write_csv(path: Path, rows: List[MetricRow]) -> None:
    fields = list(MetricRow.__dataclass_fields__.keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fields)
        w.writeheader()
        for r in rows:
            w.writerow({k: getattr(r, k) for k in fields})


def mean_stdev(vals: List[float]) -> Tuple[float, float]:
    if len(vals) == 1:
        return vals[0], 0.0
    return statistics.mean(vals), statistics.stdev(vals)


SUMMARY_METRICS = ("bits_per_symbol", "entropy_bits", "compression_ratio", "encode_ms", "decode_ms", "build_tree_ms", "total_ms")

def group_summary(rows: List[MetricRow], out_path: Path) -> None:
    """
    Group by exp_name, dataset_name, text_length and compute mean/stdev
    """
    key_to: Dict[Tuple[str, str, int], List[MetricRow]] = {}
    for r in rows:
        key = (r.exp_name, r.dataset_name, r.text_length)
        key_to.setdefault(key, []).append(r)

    summary_fields = ["exp_name", "dataset_name", "text_length", "n_runs", "unique_symbols"]
    for m in SUMMARY_METRICS:
        summary_fields += [f"{m}_mean", f"{m}_stdev"]
    summary_fields.append("correctness_ok_rate")

    with out_path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=summary_fields)
        w.writeheader()
        for key, items in sorted(key_to.items()):
            exp_name, dataset_name, length = key
            out = {
                "exp_name": exp_name,
                "dataset_name": dataset_name,
                "text_length": length,
                "n_runs": len(items),
                "unique_symbols": max(x.unique_symbols for x in items),
                "correctness_ok_rate": sum(x.correctness_ok for x in items) / len(items),
            }
            for m in SUMMARY_METRICS:
                out[f"{m}_mean"], out[f"{m}_stdev"] = mean_stdev([getattr(x, m) for x in items])
            w.writerow(out)



# Plotting

def plot_experiment_1(rows: List[MetricRow], outdir: Path) -> None:
    exp_rows = [r for r in rows if r.exp_name == "exp1_distribution"]
    if not exp_rows:
        return

    datasets = sorted(set(r.dataset_name for r in exp_rows))

    def mean_for(dataset: str, field: str) -> float:
        vals = [getattr(r, field) for r in exp_rows if r.dataset_name == dataset]
        return statistics.mean(vals) if vals else float("nan")

    x = list(range(len(datasets)))

    plt.figure()
    plt.plot(x, [mean_for(d, "bits_per_symbol") for d in datasets], marker="o", label="huffman")
    plt.plot(x, [mean_for(d, "entropy_bits") for d in datasets], marker="x", linestyle="--", label="entropy")
    plt.xticks(x, datasets, rotation=20, ha="right")
    plt.ylabel("Bits per Symbol")
    plt.title("Experiment 1: Code Length vs Entropy by Distribution")
    plt.legend()
    plt.tight_layout()
    plt.savefig(outdir / "exp1_bits_per_symbol.png", dpi=200)
    plt.close()

    plt.figure()
    plt.plot(x, [mean_for(d, "compression_ratio") for d in datasets], marker="o")
    plt.xticks(x, datasets, rotation=20, ha="right")
    plt.ylabel("Encoded Bits / (8 x Symbols)")
    plt.title("Experiment 1: Compression Ratio by Distribution")
    plt.tight_layout()
    plt.savefig(outdir / "exp1_compression_ratio.png", dpi=200)
    plt.close()


def plot_experiment_2(rows: List[MetricRow], outdir: Path) -> None:
    exp_rows = [r for r in rows if r.exp_name == "exp2_size_scaling"]
    if not exp_rows:
        return

    distributions = sorted(set(r.dataset_name for r in exp_rows))

    for dist in distributions:
        dist_rows = [r for r in exp_rows if r.dataset_name == dist]
        sizes = sorted(set(r.text_length for r in dist_rows))

        def mean_size(size: int, field: str) -> float:
            vals = [getattr(r, field) for r in dist_rows if r.text_length == size]
            return statistics.mean(vals) if vals else float("nan")

        plt.figure()
        plt.plot(sizes, [mean_size(s, "encode_ms") for s in sizes], marker="o", label="encode")
        plt.plot(sizes, [mean_size(s, "decode_ms") for s in sizes], marker="o", label="decode")
        plt.xlabel("Text Length (symbols)")
        plt.ylabel("Time (ms)")
        plt.title(f"Experiment 2: Codec Time vs Size ({dist})")
        plt.legend()
        plt.tight_layout()
        plt.savefig(outdir / f"exp2_codec_time_{dist}.png", dpi=200)
        plt.close()

        plt.figure()
        plt.plot(sizes, [mean_size(s, "build_tree_ms") for s in sizes], marker="o")
        plt.xlabel("Text Length (symbols)")
        plt.ylabel("Tree Build Time (ms)")
        plt.title(f"Experiment 2: Tree Build Time vs Size ({dist})")
        plt.tight_layout()
        plt.savefig(outdir / f"exp2_build_time_{dist}.png", dpi=200)
        plt.close()



# Real input

def encode_files(paths: List[str], show_tree: bool = False, max_bits: Optional[int] = 64) -> List[MetricRow]:
    """Encode each file, print a short report, and return its metrics"""
    rows: List[MetricRow] = []
    for p in paths:
        text = read_text(Path(p))
        row, bits, root = measure_codec(text)
        row.exp_name = "input"
        row.dataset_name = Path(p).name
        rows.append(row)

        status = "" if row.correctness_ok else " ROUND TRIP FAILED"
        shown = bits if max_bits is None or len(bits) <= max_bits else bits[:max_bits] + "..."
        print(f"{p}: {len(text)} symbols, {row.unique_symbols} distinct -> {len(bits)} bits "
              f"({row.bits_per_symbol:.3f} bits/symbol, entropy {row.entropy_bits:.3f})"
              f"{status}")
        print(f"  bits: {shown}")
        if show_tree:
            print(huff.format_tree(root))
    return rows



# Main

def parse_csv_list(s: str) -> List[str]:
    return [x.strip() for x in s.split(",") if x.strip()]

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Huffman text codec experiments")
    ap.add_argument("--outdir", type=str, default="results", help="Output directory for CSV and plots")
    ap.add_argument("--runs", type=int, default=5, help="Repetitions per configuration (>=3 recommended for timing)")
    ap.add_argument("--seed", type=int, default=123, help="Base random seed")

    # Real files instead of synthetic experiments
    ap.add_argument("--input", nargs="+", default=None, help="Text files to encode and report on")
    ap.add_argument("--show_tree", action="store_true", help="Print the Huffman tree for each --input file")

    # Experiment toggles
    ap.add_argument("--no_exp1", action="store_true", help="Disable experiment 1 (distribution)")
    ap.add_argument("--no_exp2", action="store_true", help="Disable experiment 2 (size scaling)")
    ap.add_argument("--no_plots", action="store_true", help="Skip chart generation")

    # Experiment 1 controls
    ap.add_argument("--exp1_size_kb", type=int, default=64, help="Experiment 1 fixed text length in K symbols")
    ap.add_argument("--exp1_generators", type=str, default="uniform64,zipf48,repetitive90,english_like",
                    help="Comma-separated dataset generator names for experiment 1")

    # Experiment 2 controls
    ap.add_argument("--exp2_min_kb", type=int, default=1, help="Experiment 2 min length in K symbols (power-of-two growth)")
    ap.add_argument("--exp2_max_kb", type=int, default=256, help="Experiment 2 max length in K symbols (power-of-two growth)")
    ap.add_argument("--exp2_generators", type=str, default="uniform64,english_like",
                    help="Comma-separated dataset generator names for experiment 2")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.runs < 1:
        raise ValueError("--runs must be >= 1")

    outdir = Path(args.outdir)
    safe_mkdir(outdir)

    rows: List[MetricRow] = []

    if args.input:
        rows += encode_files(args.input, show_tree=args.show_tree)
    else:
        # Experiment 1: distributions (fixed size)
        if not args.no_exp1:
            fixed_size = max(1, args.exp1_size_kb) * 1024
            for gen_name in parse_csv_list(args.exp1_generators):
                for run_id in range(1, args.runs + 1):
                    dataset_name, text = generate_dataset(gen_name, fixed_size, args.seed + run_id)
                    row = run_one(text)
                    row.exp_name = "exp1_distribution"
                    row.dataset_name = dataset_name
                    row.run_id = run_id
                    rows.append(row)

        # Experiment 2: size scaling (multiple sizes, powers of 2)
        if not args.no_exp2:
            min_len = max(1, args.exp2_min_kb) * 1024
            max_len = max(1, args.exp2_max_kb) * 1024

            sizes: List[int] = []
            s = min_len
            while s <= max_len:
                sizes.append(s)
                s *= 2

            for gen_name in parse_csv_list(args.exp2_generators):
                for size in sizes:
                    for run_id in range(1, args.runs + 1):
                        dataset_name, text = generate_dataset(gen_name, size, args.seed + 10_000 + size + run_id)
                        row = run_one(text)
                        row.exp_name = "exp2_size_scaling"
                        row.dataset_name = dataset_name
                        row.run_id = run_id
                        rows.append(row)

    # Write raw and summary
    metrics_csv = outdir / "metrics.csv"
    summary_csv = outdir / "summary.csv"
    write_csv(metrics_csv, rows)
    group_summary(rows, summary_csv)

    if not args.no_plots:
        plot_experiment_1(rows, outdir)
        plot_experiment_2(rows, outdir)

    ok_rate = sum(r.correctness_ok for r in rows) / max(1, len(rows))
    print(f"Wrote {len(rows)} rows to {metrics_csv}")
    print(f"Wrote grouped summary to {summary_csv}")
    print(f"Round-trip correctness rate across all runs: {ok_rate:.3f}")
    if not args.no_plots:
        print("Charts saved in:", outdir.resolve())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
