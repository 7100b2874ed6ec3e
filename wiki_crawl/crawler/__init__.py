"""wiki_crawl.crawler: frontier, content source and link extraction."""
