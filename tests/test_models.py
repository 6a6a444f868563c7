# Copyright @ISmartCoder
# Updates Channel https://t.me/abirxdhackz
from datetime import datetime

import pytest

from tempmail_proxy.models import (
    UNKNOWN_SENDER,
    build_message,
    html_to_text,
    make_intro,
    newest_first,
    split_sender,
    to_iso,
)

from .conftest import make_message


class TestToIso:
    @pytest.mark.parametrize("value, expected", [
        (1700000000, '2023-11-14T22:13:20+00:00'),
        ('1700000000', '2023-11-14T22:13:20+00:00'),
        (1700000000000, '2023-11-14T22:13:20+00:00'),
        ('2024-03-01T10:00:00+00:00', '2024-03-01T10:00:00+00:00'),
        ('2024-03-01T12:00:00+02:00', '2024-03-01T10:00:00+00:00'),
        ('2024-03-01T10:00:00Z', '2024-03-01T10:00:00+00:00'),
        ('2024-03-01 10:00:00', '2024-03-01T10:00:00+00:00'),
        ('Fri, 01 Mar 2024 10:00:00 +0000', '2024-03-01T10:00:00+00:00'),
    ])
    def test_known_formats(self, value, expected):
        assert to_iso(value) == expected

    @pytest.mark.parametrize("value", [None, '', 'not a date'])
    def test_unparseable_defaults_to_now(self, value):
        parsed = datetime.fromisoformat(to_iso(value))
        assert abs((datetime.now(parsed.tzinfo) - parsed).total_seconds()) < 5


class TestSender:
    def test_mailtm_dict(self):
        assert split_sender({'address': 'a@b.c', 'name': 'Ann'}) == ('a@b.c', 'Ann')

    def test_display_name_string(self):
        assert split_sender('Bob Smith <bob@example.com>') == ('bob@example.com', 'Bob Smith')

    def test_bare_address(self):
        assert split_sender('bob@example.com') == ('bob@example.com', '')

    @pytest.mark.parametrize("raw", [None, '', {}])
    def test_missing_sender_is_unknown(self, raw):
        assert split_sender(raw) == (UNKNOWN_SENDER, '')


class TestBuildMessage:
    def test_defaults_for_absent_fields(self):
        message = build_message(42)
        assert message.id == '42'
        assert message.subject == ''
        assert message.from_address == UNKNOWN_SENDER
        assert message.text == message.html == message.intro == ''
        assert message.seen is False
        assert message.date

    def test_text_derived_from_html(self):
        message = build_message('1', html='<html><style>p{}</style><p>Hello</p><p>World</p></html>')
        assert message.text == 'Hello\nWorld'
        assert message.intro == 'Hello World'

    def test_html_list_is_joined(self):
        message = build_message('1', html=['<p>a</p>', '<p>b</p>'])
        assert message.html == '<p>a</p><p>b</p>'

    def test_summary_has_no_bodies(self):
        summary = make_message('m1', 1700000000).summary()
        assert set(summary) == {'id', 'subject', 'from', 'date', 'intro', 'seen'}
        full = make_message('m1', 1700000000).to_dict()
        assert full['text'] == 'body text'
        assert 'html' in full


def test_make_intro_truncates():
    intro = make_intro('word ' * 100)
    assert len(intro) <= 123
    assert intro.endswith('...')


def test_html_to_text_empty():
    assert html_to_text('') == ''


class TestNewestFirst:
    def test_orders_newest_first_and_dedupes(self):
        messages = [
            make_message('a', 1700000000),
            make_message('b', 1700000300),
            make_message('a', 1700000000),
            make_message('c', 1700000100),
        ]
        assert [m.id for m in newest_first(messages, 10)] == ['b', 'c', 'a']

    def test_cap_applies_after_ordering(self):
        messages = [make_message(str(i), 1700000000 + i) for i in range(8)]
        assert [m.id for m in newest_first(messages, 3)] == ['7', '6', '5']

    def test_equal_dates_keep_provider_order(self):
        messages = [make_message(str(i), 1700000000) for i in range(4)]
        assert [m.id for m in newest_first(messages, 10)] == ['0', '1', '2', '3']
