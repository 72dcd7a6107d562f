"""Compiled-in scraping targets.

News sites are listing pages whose article blocks are walked with CSS
selectors. Product sites are the home pages of known devices; their display
name and category are fixed here rather than read from the page.
"""

from __future__ import annotations

from ..domain.models import ListingSelectors, ProductSiteProfile, SiteProfile

NEWS_SITES: tuple[SiteProfile, ...] = (
    SiteProfile(
        url="https://www.wired.com/tag/wearables/",
        selectors=ListingSelectors(articles="article", title="h2, h3", description="p", link="a"),
    ),
    SiteProfile(
        url="https://techcrunch.com/tag/wearables/",
        selectors=ListingSelectors(
            articles="article",
            title="h2",
            description=".post-block__content",
            link="a.post-block__title__link",
        ),
    ),
    SiteProfile(
        url="https://www.theverge.com/wearables",
        selectors=ListingSelectors(
            articles=".c-entry-box--compact",
            title="h2",
            description=".c-entry-box--compact__dek",
            link="a.c-entry-box--compact__image-wrapper",
        ),
    ),
    SiteProfile(
        url="https://www.cnet.com/topics/wearable-tech/",
        selectors=ListingSelectors(articles=".c-storiesListItem", title="h3", description="p", link="a"),
    ),
)

PRODUCT_SITES: tuple[ProductSiteProfile, ...] = (
    ProductSiteProfile(url="https://hu.ma.ne/", name="Humane AI Pin", category="AI Assistant"),
    ProductSiteProfile(
        url="https://www.meta.com/smart-glasses/",
        name="Meta Ray-Ban Smart Glasses",
        category="Smart Glasses",
    ),
    ProductSiteProfile(
        url="https://www.apple.com/apple-watch-ultra/",
        name="Apple Watch Ultra",
        category="Smartwatch",
    ),
    ProductSiteProfile(url="https://ouraring.com/", name="Oura Ring", category="Health Monitor"),
    ProductSiteProfile(url="https://www.rabbit.tech/", name="Rabbit R1", category="AI Assistant"),
)
