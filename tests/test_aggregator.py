import threading
import time

from sitemapscout.core.aggregator import SitemapAggregator
from sitemapscout.core.locator import SitemapLocator
from sitemapscout.core.session import FetchResponse

ORIGIN = "https://example.com"


def _aggregator(fetcher, max_depth=3, concurrency=5):
	return SitemapAggregator(SitemapLocator(fetcher), max_depth=max_depth, concurrency=concurrency)


def test_self_referencing_index_terminates_at_max_depth(make_fetcher, docs):
	root = "https://example.com/sitemap.xml"
	f = make_fetcher({root: docs.xml(docs.index(root))})
	res = _aggregator(f, max_depth=3).collect(root, ORIGIN)
	assert f.calls == [root, root, root]
	assert res.links == []


def test_depth_limit_cuts_deep_chains(make_fetcher, docs):
	pages = {
		f"https://example.com/level{i}.xml": docs.xml(docs.index(f"https://example.com/level{i + 1}.xml"))
		for i in range(6)
	}
	f = make_fetcher(pages)
	res = _aggregator(f, max_depth=2).collect("https://example.com/level0.xml", ORIGIN)
	assert res.fetched == ["https://example.com/level0.xml", "https://example.com/level1.xml"]


def test_children_are_merged_in_order(make_fetcher, docs):
	children = [f"https://example.com/s{i}.xml" for i in range(7)]
	pages = {"https://example.com/index.xml": docs.xml(docs.index(*children))}
	for i, c in enumerate(children):
		pages[c] = docs.xml(docs.urlset(f"https://example.com/p{i}"))
	res = _aggregator(make_fetcher(pages)).collect("https://example.com/index.xml", ORIGIN)
	assert res.fetched == ["https://example.com/index.xml"] + children
	assert res.links == [f"https://example.com/p{i}" for i in range(7)]


def test_broken_child_does_not_abort_siblings(make_fetcher, docs):
	pages = {
		"https://example.com/index.xml": docs.xml(
			docs.index("https://example.com/a.xml", "https://example.com/broken.xml", "https://example.com/missing.xml")
		),
		"https://example.com/a.xml": docs.xml(docs.urlset("https://example.com/a")),
		"https://example.com/broken.xml": (200, "text/html", "<html><body>Access denied</body></html>"),
	}
	res = _aggregator(make_fetcher(pages)).collect("https://example.com/index.xml", ORIGIN)
	assert res.links == ["https://example.com/a"]
	assert res.fetched == ["https://example.com/index.xml", "https://example.com/a.xml"]


def test_prefetched_root_is_not_fetched_again(make_fetcher, docs):
	f = make_fetcher({})
	root = FetchResponse(
		url="https://example.com/sitemap.xml",
		status_code=200,
		content_type="application/xml",
		content=docs.urlset("https://example.com/x").encode(),
	)
	res = _aggregator(f).collect(root.url, ORIGIN, response=root)
	assert f.calls == []
	assert res.links == ["https://example.com/x"]
	assert res.fetched == [root.url]


class SlowFetcher:
	"""Tracks the peak number of fetches in flight."""

	def __init__(self, inner):
		self.inner = inner
		self.active = 0
		self.peak = 0
		self._lock = threading.Lock()

	def fetch(self, url, timeout):
		with self._lock:
			self.active += 1
			self.peak = max(self.peak, self.active)
		try:
			time.sleep(0.02)
			return self.inner.fetch(url, timeout)
		finally:
			with self._lock:
				self.active -= 1


def test_batches_cap_concurrent_fetches(make_fetcher, docs):
	children = [f"https://example.com/s{i}.xml" for i in range(12)]
	pages = {"https://example.com/index.xml": docs.xml(docs.index(*children))}
	for c in children:
		pages[c] = docs.xml(docs.urlset())
	f = SlowFetcher(make_fetcher(pages))
	res = _aggregator(f, concurrency=3).collect("https://example.com/index.xml", ORIGIN)
	assert len(res.fetched) == 13
	assert 1 <= f.peak <= 3


def test_nested_indexes_share_the_fetch_cap(make_fetcher, docs):
	mids = [f"https://example.com/mid{i}.xml" for i in range(5)]
	pages = {"https://example.com/index.xml": docs.xml(docs.index(*mids))}
	for i, m in enumerate(mids):
		leaves = [f"https://example.com/leaf{i}-{j}.xml" for j in range(5)]
		pages[m] = docs.xml(docs.index(*leaves))
		for leaf in leaves:
			pages[leaf] = docs.xml(docs.urlset(leaf.replace(".xml", "")))
	f = SlowFetcher(make_fetcher(pages))
	res = _aggregator(f, concurrency=5).collect("https://example.com/index.xml", ORIGIN)
	assert len(res.fetched) == 31
	assert len(res.links) == 25
	assert 1 <= f.peak <= 5
