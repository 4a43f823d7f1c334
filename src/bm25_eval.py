from __future__ import annotations
import argparse
import csv
import math
import sys
from collections import Counter, defaultdict
from pathlib import Path
from typing import Callable, Dict, List, Tuple

import regex as re
from tqdm import tqdm

from porter_stemmer import stem_tokens

K1: float = 1.2
B: float = 0.75
PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = PROJECT_ROOT / "data"
DOC_CSV = DATA_DIR / "documents.csv"
QUERY_CSV = DATA_DIR / "queries.csv"

TOKEN_RE = re.compile(r"\p{L}+")

Normaliser = Callable[[List[str]], List[str]]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="BM25")
    p.add_argument("--porter", action="store_true", help="Porter stemmer")
    p.add_argument("--docs", type=Path, default=DOC_CSV, help="documents csv (doc_id,text)")
    p.add_argument("--queries", type=Path, default=QUERY_CSV, help="queries csv (doc_id,query)")
    return p

def label(args: argparse.Namespace) -> str:
    if args.porter: return "Porter"
    return "raw"

def resolve_normaliser(args: argparse.Namespace) -> Normaliser:
    if args.porter: return stem_tokens
    return lambda toks: toks

def tokenize(text: str) -> List[str]:
    return TOKEN_RE.findall(text.lower())

def load_csv(path: Path, column: str) -> Dict[int, str]:
    try:
        with path.open(encoding="utf-8", newline="") as fh:
            return {int(row["doc_id"]): row[column] for row in csv.DictReader(fh)}
    except FileNotFoundError:
        sys.exit(f"file not found: {path}")

def build_index(documents: Dict[int, str], normalise: Normaliser) -> Dict[str, List[int]]:
    idx: Dict[str, set] = defaultdict(set)
    for doc_id, text in documents.items():
        for token in normalise(tokenize(text)):
            idx[token].add(doc_id)
    return {tok: sorted(ids) for tok, ids in idx.items()}

def bm25_score(freq: int, dl: int, avgdl: float, idf: float) -> float:
    return idf * (freq * (K1 + 1)) / (freq + K1 * (1 - B + B * dl / avgdl))

def evaluate(documents: Dict[int, str], queries: Dict[int, str], normalise: Normaliser) -> Tuple[float, float]:
    index = build_index(documents, normalise)
    tokf: Dict[int, Counter] = {}
    doclen: Dict[int, int] = {}
    bar_fmt = "{n_fmt}/{total_fmt} [{elapsed}<{remaining}, {rate_fmt}]"
    for did, text in tqdm(documents.items(), bar_format=bar_fmt):
        toks = normalise(tokenize(text))
        tokf[did] = Counter(toks)
        doclen[did] = len(toks)
    df = {tok: len(p) for tok, p in index.items()}
    avgdl = sum(doclen.values()) / len(doclen)
    N = len(doclen)
    hits = mrr_sum = 0.0
    for qid, query in tqdm(queries.items(), bar_format=bar_fmt):
        scores: Dict[int, float] = defaultdict(float)
        for t in normalise(tokenize(query)):
            if t not in df:
                continue
            idf = math.log((N - df[t] + 0.5) / (df[t] + 0.5) + 1)
            for doc_id in index[t]:
                scores[doc_id] += bm25_score(tokf[doc_id][t], doclen[doc_id], avgdl, idf)
        ranked = sorted(scores, key=scores.get, reverse=True)
        if qid in ranked:
            r = ranked.index(qid) + 1
            mrr_sum += 1 / r
            if r == 1:
                hits += 1
    return hits / len(queries), mrr_sum / len(queries)

def main() -> None:
    args = build_parser().parse_args()
    normalise = resolve_normaliser(args)
    documents = load_csv(args.docs, "text")
    queries = load_csv(args.queries, "query")
    recall, mrr = evaluate(documents, queries, normalise)
    print(f"\nResults ({label(args)})")
    print(f"Recall@1: {recall:.3f} over {len(queries)} queries")
    print(f"MRR: {mrr:.3f}")

if __name__ == "__main__":
    try: main()
    except KeyboardInterrupt:
        sys.exit("aborted")
