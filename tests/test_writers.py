import json
import os

from sitemapscout.models import DiscoveryResult
from sitemapscout.storage.writers import ResultWriter


def test_success_writes_jsonl_and_links(tmp_path):
	w = ResultWriter(data_dir=str(tmp_path))
	result = DiscoveryResult(
		success=True,
		sitemapUrl="https://example.com:8443/sitemap.xml",
		links=["https://example.com:8443/a", "https://example.com:8443/b"],
		totalLinks=2,
	)
	path = w.write("example.com", result)
	assert os.path.basename(path) == "example.com_8443.txt"
	with open(path, encoding="utf-8") as f:
		assert f.read().splitlines() == result.links
	with open(w.results_path, encoding="utf-8") as f:
		record = json.loads(f.readline())
	assert record["target"] == "example.com"
	assert record["totalLinks"] == 2


def test_failure_is_logged_without_links(tmp_path):
	w = ResultWriter(data_dir=str(tmp_path))
	assert w.write("nowhere.test", DiscoveryResult(success=False, error="No sitemap found")) == ""
	assert os.listdir(w.links_dir) == []
	with open(w.results_path, encoding="utf-8") as f:
		assert json.loads(f.readline())["error"] == "No sitemap found"
