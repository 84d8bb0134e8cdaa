"""Inline CSS used by the static site generator."""

CSS = r"""
:root {
  --bg: #1a1d23;
  --fg: #d7d7d7;
  --heading: #f8f8f8;
  --muted: #bbbbbb;
  --accent: #ff57b2;
  --border: #2b2f36;
  --sans: "Inter", system-ui, -apple-system, "Segoe UI", Roboto, sans-serif;
  --page-max: 720px;
}

html, body { height: 100%; }

body {
  font-family: var(--sans);
  font-size: 18px;
  line-height: 1.6;
  margin: 0;
  background: var(--bg);
  color: var(--fg);
  -webkit-font-smoothing: antialiased;
}

a { color: var(--accent); text-decoration: none; }
a:hover { text-decoration: underline; text-underline-offset: 0.15em; }

.container { max-width: var(--page-max); margin: 0 auto; padding: 0 1.5rem; }

header.site { padding: 2.5rem 0 2rem; }
header.site .logo { font-size: 26px; font-weight: 700; color: var(--heading); }
header.site .logo span { color: var(--accent); }

h1, h2, h3 { color: var(--heading); line-height: 1.3; }
h1 { font-size: 42px; margin: 2.5rem 0 1.5rem; }
h2 { font-size: 30px; margin: 3rem 0 1rem; }

.info { display: flex; flex-wrap: wrap; gap: 0.5rem 1.5rem; color: var(--muted); font-size: 14px; }
.info .edited { flex-basis: 100%; font-style: italic; }

ul.posts { list-style: none; padding: 0; margin: 0; }
ul.posts li { margin: 0 0 3rem; }
ul.posts strong { display: block; font-size: 28px; color: var(--heading); }
ul.posts p { margin: 0.5rem 0 1.5rem; color: var(--fg); }

a.load-more { display: inline-block; margin: 0 0 4rem; font-weight: 600; }

.banner { width: 100%; max-height: 400px; object-fit: cover; display: block; }

.post-content p { margin: 0 0 1.25rem; }
.post-content img { max-width: 100%; }
.post-content pre { white-space: pre-wrap; background: #101215; padding: 0.75rem 1rem; }

nav.pagination {
  display: flex;
  justify-content: space-between;
  gap: 1rem;
  border-top: 1px solid var(--border);
  margin-top: 4rem;
  padding-top: 2rem;
}
nav.pagination span { display: flex; flex-direction: column; color: var(--heading); }
nav.pagination .next { margin-left: auto; text-align: right; }

section.comments { margin: 3rem 0; }

aside.preview { margin: 2rem 0 4rem; }
aside.preview a {
  display: block;
  background: #4c4cde;
  color: #fff;
  text-align: center;
  padding: 1rem;
  border-radius: 8px;
}

@media (max-width: 700px) {
  h1 { font-size: 32px; }
  ul.posts strong { font-size: 22px; }
}
"""
