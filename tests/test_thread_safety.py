"""Concurrent parsing tests.

Parses run in many threads at once with different configurations. Each
call must see only its own configuration, and shared trees must be safe to
read and render from any thread.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed

from mdtree import (
    Emphasis,
    ParseConfig,
    Text,
    get_parse_config,
    parse,
    render_markdown,
    to_json,
)

SOURCE = "---\nk: v\n---\n# Title\n\n*a* [b](c)\n\n- x\n  - y\n\n```\ncode\n```"

EMPHASIS = ParseConfig(emphasis_enabled=True)
PLAIN = ParseConfig()


class TestConcurrentParsing:
    def test_configs_do_not_leak_between_threads(self) -> None:
        def work(i: int) -> tuple[int, type]:
            config = EMPHASIS if i % 2 else PLAIN
            doc = parse(SOURCE, config=config)
            return i, type(doc.body[1].content[0])

        with ThreadPoolExecutor(max_workers=8) as executor:
            futures = [executor.submit(work, i) for i in range(200)]
            results = dict(f.result() for f in as_completed(futures))

        for i, node_type in results.items():
            assert node_type is (Emphasis if i % 2 else Text), i

    def test_results_match_sequential(self) -> None:
        expected = to_json(parse(SOURCE))

        with ThreadPoolExecutor(max_workers=8) as executor:
            outputs = list(executor.map(lambda _: to_json(parse(SOURCE)), range(100)))

        assert all(out == expected for out in outputs)

    def test_worker_config_restored(self) -> None:
        def work(_: int) -> bool:
            before = get_parse_config()
            parse("x", config=EMPHASIS)
            return get_parse_config() is before

        with ThreadPoolExecutor(max_workers=4) as executor:
            assert all(executor.map(work, range(50)))

    def test_shared_tree_rendered_concurrently(self) -> None:
        doc = parse(SOURCE)
        expected = render_markdown(doc)

        with ThreadPoolExecutor(max_workers=8) as executor:
            outputs = list(executor.map(lambda _: render_markdown(doc), range(100)))

        assert outputs == [expected] * 100
