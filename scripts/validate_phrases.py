#!/usr/bin/env python3
"""
Phrase dataset validation script.
Loads a dataset the same way the server does at startup and reports its contents.
"""
import argparse
import sys
from collections import Counter

from app.core.exceptions import PhraseIndexLoadError
from app.services.phrase_index import fold_key, load_phrase_index


def main():
    """Validate a phrase dataset and print a summary."""
    parser = argparse.ArgumentParser(description="Validate a phrase dataset")
    parser.add_argument(
        "path",
        nargs="?",
        default="data/phrases.json",
        help="Path to the phrase dataset (default: data/phrases.json)"
    )
    args = parser.parse_args()

    print(f"🔍 Loading {args.path}...\n")

    try:
        index = load_phrase_index(args.path)
    except PhraseIndexLoadError as e:
        print(f"❌ {e.error_code.value}: {e.message}")
        for key, value in e.details.items():
            print(f"   {key}: {value}")
        sys.exit(1)

    stats = index.stats()
    print("=" * 60)
    print(f"📊 Phrases: {stats['total_count']}")
    print(f"   With Dutch explanation: {stats['dutch_count']}")
    print(f"   Categories: {stats['category_count']}")
    for category in index.categories():
        print(f"     - {category or '<none>'}: {len(index.get_by_category(category))}")
    print("=" * 60)

    # Duplicate terms resolve to the last record, so flag them
    term_counts = Counter(fold_key(p.text) for p in index.all_phrases())
    duplicates = sorted(term for term, count in term_counts.items() if count > 1)
    if duplicates:
        print("\n⚠️  Duplicate terms (the last occurrence wins):")
        for term in duplicates:
            print(f"   - {term}")

    print("\n✅ Dataset loaded successfully")
    sys.exit(0)


if __name__ == "__main__":
    main()
