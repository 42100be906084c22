"""sitemap_scout.crawler: Сетевой слой, разбор sitemap index и пул воркеров."""
