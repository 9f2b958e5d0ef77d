import random
import string
import threading

import pytest

from db.models import Word


def test_subscribe_emits_current_snapshot(dao):
    seen = []
    sub = dao.get_alphabetized_words().subscribe(seen.append)
    sub.cancel()
    assert seen == [[Word("Hello"), Word("World!")]]


def test_new_word_is_emitted_in_order(dao):
    seen = []
    dao.get_alphabetized_words().subscribe(seen.append)

    dao.insert(Word("Middle"))

    assert len(seen) == 2
    assert len(seen[-1]) == len(seen[0]) + 1
    assert [w.word for w in seen[-1]] == ["Hello", "Middle", "World!"]


def test_duplicate_insert_emits_nothing(dao):
    seen = []
    dao.get_alphabetized_words().subscribe(seen.append)

    dao.insert(Word("World!"))

    assert seen == [[Word("Hello"), Word("World!")]]


def test_delete_all_emits_empty_list(dao):
    seen = []
    dao.get_alphabetized_words().subscribe(seen.append)

    dao.delete_all()

    assert seen[-1] == []


def test_cancel_stops_delivery_and_detaches(dao):
    flow = dao.get_alphabetized_words()
    seen = []
    sub = flow.subscribe(seen.append)
    sub.cancel()
    sub.cancel()

    dao.insert(Word("later"))

    assert len(seen) == 1
    assert flow.subscriber_count() == 0
    assert dao.db._listeners == []


def test_snapshots_always_sorted(dao):
    rng = random.Random(1234)
    seen = []
    dao.get_alphabetized_words().subscribe(seen.append)

    for _ in range(60):
        text = "".join(rng.choice(string.ascii_letters + "!é ") for _ in range(rng.randint(1, 6)))
        dao.insert(Word(text))

    for snapshot in seen:
        texts = [w.word for w in snapshot]
        assert texts == sorted(texts)
        assert len(texts) == len(set(texts))


def test_iteration_yields_until_closed(dao):
    flow = dao.get_alphabetized_words()
    stream = iter(flow)

    assert [w.word for w in next(stream)] == ["Hello", "World!"]

    threading.Thread(target=dao.insert, args=(Word("Again"),)).start()
    assert [w.word for w in next(stream)] == ["Again", "Hello", "World!"]

    stream.close()
    assert flow.subscriber_count() == 0


def test_concurrent_writers_deliver_every_change(dao):
    seen = []
    dao.get_alphabetized_words().subscribe(seen.append)

    threads = [
        threading.Thread(target=dao.insert, args=(Word(f"w{i:02d}"),))
        for i in range(20)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    # one initial snapshot plus one per committed insert, each strictly larger
    assert len(seen) == 21
    assert [len(s) for s in seen] == list(range(2, 23))


def test_resubscribing_does_not_duplicate_snapshots(dao):
    flow = dao.get_alphabetized_words()
    for _ in range(3):
        flow.subscribe(lambda words: None).cancel()
    assert dao.db._listeners == []

    seen = []
    flow.subscribe(seen.append)
    dao.insert(Word("Once"))

    assert len(seen) == 2
    assert len(dao.db._listeners) == 1


def test_failing_subscriber_does_not_starve_others(dao, caplog):
    flow = dao.get_alphabetized_words()
    calls = []

    def broken(words):
        calls.append(words)
        if len(calls) > 1:
            raise RuntimeError("client gone")

    seen = []
    flow.subscribe(broken)
    flow.subscribe(seen.append)

    assert dao.insert(Word("Committed")) is True

    assert [w.word for w in seen[-1]] == ["Committed", "Hello", "World!"]
    assert len(seen) == 2
    assert "client gone" in caplog.text


def test_failing_initial_emission_leaves_flow_detached(dao):
    flow = dao.get_alphabetized_words()

    def broken(words):
        raise ValueError("bad collector")

    with pytest.raises(ValueError):
        flow.subscribe(broken)

    assert flow.subscriber_count() == 0
    assert dao.db._listeners == []
