"""Thread safety tests for stepmark.

Markdown instances apply their config through a ContextVar. These tests
verify that instances with different configs do not interfere when used
concurrently, and that a shared renderer and documents are safe to share.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed

from stepmark import HtmlRenderer, Markdown, parse

SOURCE = "# Step -- one\n\n- first -- item\n| a -- b |"


class TestConcurrentConfig:
    def test_instances_with_different_configs(self) -> None:
        """Each thread sees only its own em dash setting."""
        with_dash = Markdown()
        without_dash = Markdown(em_dash=False)
        expected_with = with_dash(SOURCE)
        expected_without = without_dash(SOURCE)
        assert expected_with != expected_without

        def run(index: int) -> tuple[bool, str]:
            md = with_dash if index % 2 == 0 else without_dash
            return index % 2 == 0, md(SOURCE)

        with ThreadPoolExecutor(max_workers=8) as pool:
            futures = [pool.submit(run, i) for i in range(200)]
            for future in as_completed(futures):
                dashed, html = future.result()
                assert html == (expected_with if dashed else expected_without)

    def test_shared_renderer(self) -> None:
        """One renderer can render many documents concurrently."""
        renderer = HtmlRenderer()
        sources = [f"# Title {i}\n- item {i}" for i in range(50)]
        docs = [parse(s) for s in sources]
        expected = [renderer.render(d) for d in docs]

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(renderer.render, docs))
        assert results == expected
