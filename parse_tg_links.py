#!/usr/bin/env python3
"""
Parse Telegram Desktop chat export HTML and collect links with their senders.
"""

import re
import csv
import json
import mimetypes
from pathlib import Path
from bs4 import BeautifulSoup, Tag
from bs4.builder import ParserRejectedMarkup
from typing import List, Dict, Any, Iterator, Tuple
import argparse

# Configuration
CONFIG = {
    'input_dir': 'ChatExport',
    'output_file': 'telegram_links.json',
    'output_format': 'json',
    'sender_class': 'from_name',
    'skip_prefixes': ('#go_to', 'https://t.me/', 'messages.html'),
}

# " 15.06.2021 12:30:00" at the very end of a sender label
TIMESTAMP_SUFFIX = re.compile(r' [0-9]{2}\.[0-9]{2}\.[0-9]{4} [0-9]{2}:[0-9]{2}:[0-9]{2}\Z')

# Pagination pages of the export: messages2.html ... messages99.html
MESSAGES_PAGE = re.compile(r'messages[0-9]{1,2}\.html')

# Space separators, line terminators and the BOM; unlike str.strip(), \x1c-\x1f are kept
TRIM_CHARS = (
    "\t\n\x0b\x0c\r \xa0\u1680\u2000\u2001\u2002\u2003\u2004\u2005"
    "\u2006\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)


class ParseFailure(ValueError):
    """Raised when document text cannot be parsed into an element tree."""


class NoHtmlFilesError(ValueError):
    """Raised when a batch contains no HTML documents to process."""


def trim_text(text: str) -> str:
    """Strip leading and trailing TRIM_CHARS from text."""
    return text.strip(TRIM_CHARS)


def normalize_sender_name(raw_name: str) -> str:
    """
    Strip the trailing export timestamp from a sender label.

    Args:
        raw_name: Sender label text, e.g. "Ivan 15.06.2021 12:30:00"

    Returns:
        str: "Ivan" for the example above. Labels without a timestamp are
             returned untouched, surrounding whitespace included.
    """
    match = TIMESTAMP_SUFFIX.search(raw_name)
    if match:
        return trim_text(raw_name[:match.start()])
    return raw_name


def is_accepted_href(href: str) -> bool:
    """Check a raw href against the export's navigation and service links."""
    if trim_text(href) == '':
        return False
    if href.startswith(CONFIG['skip_prefixes']):
        return False
    if MESSAGES_PAGE.fullmatch(href):
        return False
    return True


def parse_document(html_text):
    """Parse markup into a BeautifulSoup tree, raising ParseFailure if impossible."""
    if not isinstance(html_text, (str, bytes)):
        raise ParseFailure(f"Expected document text, got {type(html_text).__name__}")
    try:
        return BeautifulSoup(html_text, 'html.parser')
    except (ParserRejectedMarkup, AssertionError) as e:
        raise ParseFailure(f"Could not parse document: {e}") from e


def iter_elements(root) -> Iterator[Tag]:
    """Yield every element below root in document (pre-order) order."""
    for desc in root.descendants:
        if isinstance(desc, Tag):
            yield desc


def iter_link_events(elements, sender_class=CONFIG['sender_class']) -> Iterator[Tuple[str, ...]]:
    """
    Turn a flat element sequence into sender and link events.

    An element that is both a sender label and an anchor produces both
    events, sender first.
    """
    for element in elements:
        if sender_class in element.get('class', []):
            yield ('sender', normalize_sender_name(trim_text(element.get_text())))
        if element.name == 'a' and element.has_attr('href'):
            yield ('link', element.get('href'), trim_text(element.get_text()))


def document_events(html_text, sender_class=CONFIG['sender_class']) -> List[Tuple[str, ...]]:
    """Parse a document and return its sender/link events in document order."""
    soup = parse_document(html_text)
    # html.parser does not synthesize <body> for fragments
    root = soup.body if soup.body is not None else soup
    return list(iter_link_events(iter_elements(root), sender_class))


def fold_link_events(events) -> List[Dict[str, str]]:
    """Carry the last seen sender forward over the events, keeping accepted links."""
    last_sender = ''
    records = []
    for event in events:
        if event[0] == 'sender':
            last_sender = event[1]
            continue

        _, href, label = event
        if is_accepted_href(href):
            records.append({
                'sender': last_sender,
                'target': href,
                'label': label,
            })
    return records


def extract_links(html_text: str, sender_class: str = CONFIG['sender_class']) -> List[Dict[str, str]]:
    """
    Extract accepted links from one exported document.

    Sender state starts empty on every call and is carried forward linearly
    over the flattened element sequence.

    Args:
        html_text: Markup of a single export page
        sender_class: CSS class marking sender label elements

    Returns:
        list: {'sender', 'target', 'label'} dicts in document order
    """
    return fold_link_events(document_events(html_text, sender_class))


HTML_PATTERNS = ('**/*.html', '**/*.htm')


def _natural_parts(text):
    return [int(part) if part.isdigit() else part.lower()
            for part in re.split(r'([0-9]+)', text)]


def natural_sort_key(path):
    """Sort key that orders messages.html, messages2.html, messages10.html."""
    path = Path(path)
    return (_natural_parts(str(path.parent)), _natural_parts(path.stem), path.suffix.lower())


def collect_html_files(paths) -> List[Path]:
    """Expand directories and keep only files that look like HTML documents."""
    html_files = []
    for path in paths:
        path = Path(path)
        if path.is_dir():
            candidates = sorted(
                (p for pattern in HTML_PATTERNS for p in path.glob(pattern)),
                key=natural_sort_key,
            )
        else:
            candidates = [path]

        for candidate in candidates:
            mime_type, _ = mimetypes.guess_type(str(candidate))
            if mime_type == 'text/html':
                html_files.append(candidate)
    return html_files


class TelegramLinkParser:
    def __init__(self, input_paths, sender_class=CONFIG['sender_class']):
        self.input_paths = list(input_paths)
        self.sender_class = sender_class
        self.links = []
        self.failures = []
        self.stats = {
            'files_processed': 0,
            'files_failed': 0,
            'anchors_seen': 0,
            'links_accepted': 0,
            'links_rejected': 0,
            'sender_labels': 0,
        }

    def process_document(self, html_text: str) -> List[Dict[str, str]]:
        """Extract one document and append its records to the result set as a batch."""
        events = document_events(html_text, self.sender_class)
        records = fold_link_events(events)

        for event in events:
            if event[0] == 'sender':
                self.stats['sender_labels'] += 1
            else:
                self.stats['anchors_seen'] += 1
        self.stats['links_accepted'] += len(records)
        self.links.extend(records)
        return records

    def parse(self) -> List[Dict[str, Any]]:
        """Process every HTML file in the batch and return the accumulated links."""
        html_files = collect_html_files(self.input_paths)
        if not html_files:
            raise NoHtmlFilesError("Please supply at least one valid HTML file.")

        print(f"Found {len(html_files)} HTML files")

        for i, html_file in enumerate(html_files):
            try:
                with open(html_file, 'r', encoding='utf-8', errors='replace') as f:
                    html_text = f.read()
                records = self.process_document(html_text)
            except (ParseFailure, OSError) as e:
                print(f"Error processing {html_file}: {e}")
                self.failures.append({'file': str(html_file), 'error': str(e)})
                self.stats['files_failed'] += 1
                continue

            self.stats['files_processed'] += 1
            print(f"[{i + 1}/{len(html_files)}] {html_file}: {len(records)} links")

        self.stats['links_rejected'] = self.stats['anchors_seen'] - self.stats['links_accepted']

        print(f"\nParser Statistics:")
        print(f"  Files processed: {self.stats['files_processed']}")
        print(f"  Files failed: {self.stats['files_failed']}")
        print(f"  Sender labels found: {self.stats['sender_labels']}")
        print(f"  Anchors found: {self.stats['anchors_seen']}")
        print(f"  Links accepted: {self.stats['links_accepted']}")
        print(f"  Links rejected: {self.stats['links_rejected']}")

        return self.links

    def save_to_json(self, output_file: str):
        """Save links to JSON file."""
        with open(output_file, 'w', encoding='utf-8') as f:
            json.dump(self.links, f, indent=2, ensure_ascii=False)

    def save_to_csv(self, output_file: str):
        """Save links to CSV file."""
        with open(output_file, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=['sender', 'target', 'label'])
            writer.writeheader()
            writer.writerows(self.links)


def main(argv=None):
    # Parse command-line arguments
    parser_args = argparse.ArgumentParser(description='Extract links and senders from Telegram chat export HTML files')
    parser_args.add_argument('inputs', nargs='*', default=[CONFIG['input_dir']],
                            help=f"HTML files or export directories (default: {CONFIG['input_dir']})")
    parser_args.add_argument('-o', '--output', default=CONFIG['output_file'],
                            help=f"Output file (default: {CONFIG['output_file']})")
    parser_args.add_argument('-f', '--format', choices=['json', 'csv'], default=CONFIG['output_format'],
                            help=f"Output format (default: {CONFIG['output_format']})")
    parser_args.add_argument('--sender-class', default=CONFIG['sender_class'],
                            help=f"CSS class marking sender labels (default: {CONFIG['sender_class']})")
    args = parser_args.parse_args(argv)

    print(f"Parsing {', '.join(args.inputs)}...")
    parser = TelegramLinkParser(args.inputs, sender_class=args.sender_class)
    try:
        links = parser.parse()
    except NoHtmlFilesError as e:
        print(e)
        return 1

    if args.format == 'csv':
        parser.save_to_csv(args.output)
    else:
        parser.save_to_json(args.output)
    print(f"Saved {len(links)} links to {args.output}")

    if parser.failures:
        print(f"{len(parser.failures)} files could not be processed")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
