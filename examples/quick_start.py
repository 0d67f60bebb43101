#!/usr/bin/env python3
"""
Quick start for simple-xml.

Loads a small document, walks the tree, edits it and writes it back out in
both render modes.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from simple_xml import (
    XMLError,
    from_string,
    new,
    new_filled,
)
from simple_xml.api import to_etree
from simple_xml.shared.config import WriterConfig

BOOKS = """<?xml version="1.0"?>
<library name="city">
    <!-- opening hours are kept elsewhere -->
    <book id="1"><title>Dune</title><year>1965</year></book>
    <book id="2"><title>Solaris</title><year>1961</year></book>
</library>
"""


def quick_start_example():
    print("QUICK START - simple-xml")
    print("=" * 40)

    # Step 1: parse
    print("\nStep 1: Parsing")
    print("-" * 30)
    library = from_string(BOOKS)
    print(f"Root: <{library.tag}> name={library.get_attribute('name')!r}")
    for book in library["book"]:
        title = book["title"][0].content
        year = book["year"][0].content
        print(f"  book {book.get_attribute('id')}: {title} ({year})")

    # Step 2: edit
    print("\nStep 2: Editing")
    print("-" * 30)
    library.add_child(new_filled(
        "book", {"id": "3"}, "",
        {"title": [new("title", "Neuromancer")], "year": [new("year", "1984")]},
    ))
    library.set_attribute("name", "city & county")
    print(f"Books now: {len(library['book'])}")

    # Step 3: write
    print("\nStep 3: Writing")
    print("-" * 30)
    print(library.to_string())
    print()
    print(library.to_string_pretty(WriterConfig(indent=2, escape=True), declaration=True))

    # Step 4: hand over to ElementTree
    print("Step 4: ElementTree")
    print("-" * 30)
    element = to_etree(library)
    print(f"ElementTree root has {len(element)} children")


def error_example():
    print("\nErrors")
    print("-" * 30)
    for text in ['<a k=v/>', '<a><b></a>', 'junk<a/>']:
        try:
            from_string(text)
        except XMLError as e:
            print(f"{e.kind.name:28} {e}")


if __name__ == "__main__":
    quick_start_example()
    error_example()
