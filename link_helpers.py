#!/usr/bin/env python3
"""
Helper functions for working with links extracted from Telegram chat exports.
"""

import json

UNKNOWN_SENDER = 'Unknown'


def display_sender(link):
    """Return the sender of a link record, or "Unknown" when it has none."""
    return link.get('sender') or UNKNOWN_SENDER


def append_records(results, records):
    """
    Append one document's records to the accumulated result set.

    Args:
        results: List of link records collected so far
        records: Records from a single document, in document order

    Returns:
        list: The same results list, grown by the batch
    """
    results.extend(records)
    return results


def unique_senders(links):
    """
    Collect the sender names available for filtering.

    Args:
        links: List of link records

    Returns:
        list: Unique display senders in the order they first appear
    """
    senders = []
    seen = set()
    for link in links:
        sender = display_sender(link)
        if sender not in seen:
            seen.add(sender)
            senders.append(sender)
    return senders


def filter_by_sender(links, sender=None):
    """
    Restrict links to a single sender.

    Args:
        links: List of link records
        sender: Sender name to keep, compared with the stored sender;
                empty or None keeps everything

    Returns:
        list: Matching link records, order preserved
    """
    if not sender:
        return list(links)
    return [link for link in links if link.get('sender') == sender]


def count_links_by_sender(links):
    """Count links per display sender, in first-seen order."""
    counts = {}
    for link in links:
        sender = display_sender(link)
        counts[sender] = counts.get(sender, 0) + 1
    return counts


def load_links(json_file):
    """Load link records from a JSON file written by parse_tg_links."""
    with open(json_file, 'r', encoding='utf-8') as f:
        return json.load(f)


def count_links(json_file):
    """
    Count the total number of links in the parsed JSON file.

    Args:
        json_file: Path to the JSON file containing links

    Returns:
        int: Number of links, or -1 if error
    """
    try:
        return len(load_links(json_file))
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error counting links: {e}")
        return -1


def inspect_links(json_file, num_links=5, verbose=False):
    """
    Inspect a sample of links from the parsed JSON file.

    Args:
        json_file: Path to the JSON file containing links
        num_links: Number of links to inspect (default 5)
        verbose: If True, print full link text; if False, truncate it
    """
    try:
        links = load_links(json_file)
    except FileNotFoundError:
        print(f"Error: File '{json_file}' not found")
        return
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in file '{json_file}': {e}")
        return

    print(f"Total links: {len(links)}")
    print(f"Senders: {len(unique_senders(links))}")
    print(f"\nInspecting first {min(num_links, len(links))} links:\n")

    for i, link in enumerate(links[:num_links]):
        print(f"{'='*80}")
        print(f"LINK {i+1}")
        print(f"{'='*80}")
        print(f"Sender: {display_sender(link)}")
        print(f"Target: {link.get('target', 'N/A')}")

        label = link.get('label', '')
        if verbose or len(label) <= 200:
            print(f"Text: {label}")
        else:
            print(f"Text (truncated): {label[:200]}...")
        print()
