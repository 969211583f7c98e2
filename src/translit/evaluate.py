"""Score a transliterator against reference transliterations."""
from __future__ import annotations

import argparse
import csv
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
from sacrebleu.metrics import CHRF

from src.translit.loaders import (
    load_cjk_mappings,
    load_script_data,
    load_substring_mappings,
    load_unicode_overwrite_mappings,
)
from src.translit.pipeline import Transliterator
from src.translit.script import CodePointToScriptMapper
from src.translit.transliterators import (
    build_general_transliterator,
    build_language_transliterators,
    transliterator_for_language,
)

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
log = logging.getLogger(__name__)

EVAL_COLUMNS = ["source", "reference"]


def score_transliterations(predictions: List[str], references: List[str], prefix: str = "") -> Dict:
    """Compute chrF and exact-match accuracy on prediction/reference strings."""
    if len(predictions) != len(references):
        raise ValueError(f"Got {len(predictions)} predictions for {len(references)} references")
    chrf = CHRF()
    chrf_score = chrf.corpus_score(predictions, [references]).score if predictions else 0.0
    exact = sum(p == r for p, r in zip(predictions, references))
    accuracy = exact / len(references) if references else 0.0

    p = f"{prefix}_" if prefix else ""
    return {
        f"{p}chrf": chrf_score,
        f"{p}exact_match": accuracy,
        f"{p}count": len(references),
    }


def load_eval_set(path: Path) -> pd.DataFrame:
    """Read a tab-separated file with ``source`` and ``reference`` columns.

    Fields are taken literally: quote characters are part of the text.
    """
    df = pd.read_csv(path, sep="\t", dtype=str, keep_default_na=False, quoting=csv.QUOTE_NONE)
    missing = set(EVAL_COLUMNS) - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns: {missing}")
    return df


def evaluate(transliterator: Transliterator, df: pd.DataFrame) -> pd.DataFrame:
    """Return ``df`` with a ``prediction`` column added."""
    df = df.copy()
    df["prediction"] = [transliterator.transliterate(s) for s in df["source"]]
    return df


def run_evaluation(
    eval_path: Path,
    scripts_path: Optional[Path] = None,
    mapping_paths: Optional[List[Path]] = None,
    cjk_path: Optional[Path] = None,
    overwrite_path: Optional[Path] = None,
    language: str = "",
    output_path: Optional[Path] = None,
) -> Dict:
    """Build a transliterator from data files and score it. Returns stats dict."""
    scripts = load_script_data(scripts_path) if scripts_path else []
    custom_mappings = load_substring_mappings(mapping_paths) if mapping_paths else None
    extra_mappers = []
    if overwrite_path:
        extra_mappers.append(load_unicode_overwrite_mappings(overwrite_path))
    if cjk_path:
        extra_mappers.append(load_cjk_mappings(cjk_path))

    general = build_general_transliterator(CodePointToScriptMapper(scripts), custom_mappings,
                                           extra_mappers)
    registry = build_language_transliterators(general, custom_mappings)
    transliterator = transliterator_for_language(language, registry, default=general)

    df = load_eval_set(eval_path)
    log.info(f"Evaluating {len(df)} examples from {eval_path}")
    scored = evaluate(transliterator, df)
    stats = score_transliterations(scored["prediction"].tolist(), scored["reference"].tolist())
    log.info(f"chrF={stats['chrf']:.2f} exact_match={stats['exact_match']:.3f}")

    if output_path is not None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        scored.to_csv(output_path, sep="\t", index=False)
        with open(output_path.with_suffix(".json"), "w") as f:
            json.dump(stats, f, indent=2)
        log.info(f"Outputs written to {output_path}")
    return stats


def main():
    parser = argparse.ArgumentParser(description="Score the transliterator against references")
    parser.add_argument("eval_file", type=str, help="TSV with source and reference columns")
    parser.add_argument("--scripts", type=str, default=None, help="uroman script table")
    parser.add_argument("--mappings", type=str, default=None,
                        help="Comma-separated uroman romanization tables")
    parser.add_argument("--cjk", type=str, default=None, help="Tab-separated CJK readings")
    parser.add_argument("--overwrite", type=str, default=None,
                        help="uroman Unicode data overwrite file")
    parser.add_argument("--language", type=str, default="", help="ISO 639-3 language code")
    parser.add_argument("--output", type=str, default=None)
    args = parser.parse_args()

    run_evaluation(
        eval_path=Path(args.eval_file),
        scripts_path=Path(args.scripts) if args.scripts else None,
        mapping_paths=[Path(p) for p in args.mappings.split(",")] if args.mappings else None,
        cjk_path=Path(args.cjk) if args.cjk else None,
        overwrite_path=Path(args.overwrite) if args.overwrite else None,
        language=args.language,
        output_path=Path(args.output) if args.output else None,
    )


if __name__ == "__main__":
    main()
