"""
Inquiry CSV Export
"""

import csv
from datetime import date
from io import StringIO

from fountaingate.services.notifications import parse_timestamp

CSV_HEADERS = ['Name', 'Email', 'Phone', 'Message', 'Status', 'Date']

# Which field holds the submitter's name for each inquiry kind
NAME_FIELDS = {
    'contact': 'name',
    'admission': 'parent_name',
}


def format_submitted(value):
    """'2025-10-15T14:30:00' -> 'October 15, 2025, 02:30 PM'; unparseable values pass through."""
    if not value:
        return ''
    moment = parse_timestamp(value)
    if moment is None:
        return str(value)
    return f'{moment:%B} {moment.day}, {moment:%Y}, {moment:%I:%M %p}'


def inquiries_to_csv(inquiries, kind='contact'):
    """Build the CSV text, one row per inquiry in the given order."""
    name_field = NAME_FIELDS.get(kind, 'name')
    output = StringIO()
    writer = csv.writer(output, lineterminator='\n')
    writer.writerow(CSV_HEADERS)
    for inquiry in inquiries:
        writer.writerow([
            inquiry.get(name_field) or '',
            inquiry.get('email') or '',
            inquiry.get('phone') or '',
            inquiry.get('message') or '',
            inquiry.get('status') or '',
            format_submitted(inquiry.get('created_at')),
        ])
    return output.getvalue()


def export_filename(kind, today=None):
    today = today or date.today()
    return f'{kind}-inquiries-{today.isoformat()}.csv'
