"""Computed-style extraction: renders a page in Playwright and snapshots element styles."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from playwright.async_api import Page, async_playwright

from style_diff.models.config import BrowserConfig
from style_diff.models.element import ElementRecord
from style_diff.source_utils import resolve_source

logger = logging.getLogger(__name__)

# Grace period for late scripts/fonts after the load event
SETTLE_DELAY_MS = 500

_COLLECT_STYLES_JS = """([selectorList, propertyList]) => {
    function getXPath(element) {
        if (element.id !== '') return `//*[@id="${element.id}"]`;
        if (element === document.body) return '/html/body';
        if (!element.parentNode || element.parentNode.nodeType !== 1) {
            return '/' + element.tagName.toLowerCase();
        }
        let ix = 0;
        const siblings = element.parentNode.childNodes;
        for (let i = 0; i < siblings.length; i++) {
            const sibling = siblings[i];
            if (sibling === element) {
                const tag = element.tagName.toLowerCase();
                return getXPath(element.parentNode) + '/' + tag + '[' + (ix + 1) + ']';
            }
            if (sibling.nodeType === 1 && sibling.tagName === element.tagName) ix++;
        }
        return '';
    }

    function classList(el) {
        if (!el.className || typeof el.className !== 'string') return [];
        const trimmed = el.className.trim();
        return trimmed ? trimmed.split(/\\s+/) : [];
    }

    function uniqueSelector(el, classes) {
        const tag = el.tagName.toLowerCase();
        if (el.id) return `#${el.id}`;
        if (classes.length) return `${tag}.${classes.join('.')}`;
        return tag;
    }

    let elements = [];
    if (!selectorList || selectorList.length === 0) {
        elements = Array.from(document.querySelectorAll('[class], [id]'));
    } else {
        for (const selector of selectorList) {
            try {
                elements.push(...document.querySelectorAll(selector));
            } catch (e) {
                console.warn(`Invalid selector: ${selector}`);
            }
        }
    }
    elements = [...new Set(elements)];

    return elements.map(el => {
        const computed = window.getComputedStyle(el);
        const styles = {};
        if (propertyList && propertyList.length > 0) {
            for (const prop of propertyList) styles[prop] = computed.getPropertyValue(prop);
        } else {
            for (let i = 0; i < computed.length; i++) {
                styles[computed[i]] = computed.getPropertyValue(computed[i]);
            }
        }
        const classes = classList(el);
        return {
            selector: uniqueSelector(el, classes),
            xpath: getXPath(el),
            tagName: el.tagName.toLowerCase(),
            id: el.id || null,
            classes: classes,
            styles: styles,
        };
    });
}"""


async def collect_element_styles(
    page: Page,
    selectors: Sequence[str] = (),
    properties: Sequence[str] = (),
) -> list[ElementRecord]:
    """Snapshot identity and computed styles of the matching elements on a loaded page."""
    raw_elements = await page.evaluate(_COLLECT_STYLES_JS, [list(selectors), list(properties)])
    records = [ElementRecord.model_validate(raw) for raw in raw_elements]
    logger.debug("Extracted styles from %d elements", len(records))
    return records


async def extract_styles(
    source: str,
    selectors: Sequence[str] = (),
    properties: Sequence[str] = (),
    *,
    timeout_ms: int = 30000,
    browser_config: Optional[BrowserConfig] = None,
) -> list[ElementRecord]:
    """Load ``source`` (URL or local HTML file) and extract per-element computed styles.

    An empty ``selectors`` list means every element carrying a class or id; an
    empty ``properties`` list means every computed property.

    Raises ValueError for a source that is neither a URL nor an existing file,
    and RuntimeError when the page cannot be rendered or read.
    """
    browser_config = browser_config or BrowserConfig()
    page_url, is_remote = resolve_source(source)

    try:
        async with async_playwright() as p:
            logger.debug("Launching browser...")
            browser = await p.chromium.launch(headless=browser_config.headless)
            try:
                page = await browser.new_page(viewport={
                    "width": browser_config.viewport.width,
                    "height": browser_config.viewport.height,
                })
                logger.debug("Loading source: %s", page_url)
                await page.goto(
                    page_url,
                    wait_until="networkidle" if is_remote else "domcontentloaded",
                    timeout=timeout_ms,
                )
                await page.wait_for_timeout(SETTLE_DELAY_MS)
                return await collect_element_styles(page, selectors, properties)
            finally:
                await browser.close()
    except Exception as e:
        raise RuntimeError(f"Failed to extract styles from {source}: {e}") from e


async def extract_styles_from_both_sites(
    old_source: str,
    new_source: str,
    selectors: Sequence[str] = (),
    properties: Sequence[str] = (),
    *,
    timeout_ms: int = 30000,
    browser_config: Optional[BrowserConfig] = None,
) -> tuple[list[ElementRecord], list[ElementRecord]]:
    """Extract the old site, then the new site. Either failure aborts the whole run."""
    logger.info("Extracting styles from old site: %s", old_source)
    old_records = await extract_styles(
        old_source, selectors, properties,
        timeout_ms=timeout_ms, browser_config=browser_config,
    )
    logger.info("Extracting styles from new site: %s", new_source)
    new_records = await extract_styles(
        new_source, selectors, properties,
        timeout_ms=timeout_ms, browser_config=browser_config,
    )
    return old_records, new_records
