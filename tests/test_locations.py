from maplens.core.locations import DEFAULT_SITEMAP_PATHS, collect_locations


def test_start_urls_are_exclusive():
	locs = ["https://x.com/s1.xml", "https://x.com/s1.xml", "https://x.com/s2.xml"]
	assert collect_locations(locs, "https://x.com", DEFAULT_SITEMAP_PATHS, start_urls=True) == {
		"https://x.com/s1.xml",
		"https://x.com/s2.xml",
	}


def test_paths_combined_with_explicit_locations():
	got = collect_locations(["https://x.com/robots-map.xml"], "https://x.com", ["sitemap.xml", "/sitemap_index.xml"])
	assert got == {
		"https://x.com/robots-map.xml",
		"https://x.com/sitemap.xml",
		"https://x.com/sitemap_index.xml",
	}


def test_root_trailing_slash_not_doubled():
	assert collect_locations([], "https://x.com/", ["/sitemap.xml"]) == {"https://x.com/sitemap.xml"}


def test_nothing_to_try():
	assert collect_locations([], "https://x.com", []) == set()
	assert collect_locations(None, "https://x.com", None) == set()
	assert collect_locations([" "], "https://x.com", [""]) == set()


def test_explicit_location_dedup_with_path():
	got = collect_locations(["https://x.com/sitemap.xml"], "https://x.com", ["/sitemap.xml"])
	assert got == {"https://x.com/sitemap.xml"}
