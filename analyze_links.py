#!/usr/bin/env python3
"""Show extracted Telegram links as a table, optionally filtered by sender."""

import argparse

from link_helpers import (
    count_links_by_sender,
    display_sender,
    filter_by_sender,
    load_links,
    unique_senders,
)


def format_link_row(link):
    """Format a single link as a table row: sender, target, text."""
    sender = display_sender(link)[:24]
    target = link.get('target', '')
    label = link.get('label', '')
    return f"{sender:<25} {target:<60} {label}"


def print_links_table(links):
    """Print links in table format"""
    print(f"{'Sender':<25} {'Link':<60} {'Text'}")
    print("-" * 120)
    for link in links:
        print(format_link_row(link))


def print_senders(links):
    """Print the sender choices with how many links each posted"""
    counts = count_links_by_sender(links)
    print(f"{'Sender':<25} {'Links'}")
    print("-" * 40)
    for sender in unique_senders(links):
        print(f"{sender:<25} {counts[sender]}")


def print_stats(links):
    """Print totals for the link file"""
    counts = count_links_by_sender(links)
    print(f"Total links: {len(links)}")
    print(f"Senders: {len(counts)}")
    if counts:
        top_sender, top_count = max(counts.items(), key=lambda item: item[1])
        print(f"Most links: {top_sender} ({top_count})")


def main(argv=None):
    parser = argparse.ArgumentParser(description='Analyze links extracted from Telegram exports')
    parser.add_argument('-f', '--file', default='telegram_links.json',
                       help='JSON file to analyze (default: telegram_links.json)')
    parser.add_argument('-s', '--sender', default='',
                       help='Only show links from this sender')
    parser.add_argument('--senders', action='store_true',
                       help='List senders available for filtering')
    parser.add_argument('--stats', action='store_true',
                       help='Print link totals')

    args = parser.parse_args(argv)
    links = load_links(args.file)

    if args.senders:
        print_senders(links)
    elif args.stats:
        print_stats(links)
    else:
        shown = filter_by_sender(links, args.sender)
        print_links_table(shown)
        if args.sender:
            print(f"\n{len(shown)} of {len(links)} links from {args.sender}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
