"""Pytest configuration: import path and shared Atom fixtures.

The XML payloads below mirror the shapes the wikis API returns for page,
version, comment and wiki entries.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure src directory is in path for imports
repo_root = Path(__file__).parent.parent
src_path = repo_root / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from connections_wikis.parsers import ResponseParser  # noqa: E402

WIKI_LABEL = "434a24f4-28a2-45a4-b83a-a55120f1ca72"
PAGE_LABEL = "43fa8474-8597-445a-9643-b4a0360035d2"

NAMESPACES = (
    'xmlns="http://www.w3.org/2005/Atom" '
    'xmlns:td="urn:ibm.com/td" '
    'xmlns:snx="http://www.ibm.com/xmlns/prod/sn" '
    'xmlns:app="http://www.w3.org/2007/app"'
)

WIKI_PAGE_ENTRY = f"""<?xml version="1.0" encoding="UTF-8"?>
<entry {NAMESPACES}>
  <id>urn:lsid:ibm.com:td:43fa8474-8597-445a-9643-b4a0360035d2</id>
  <td:uuid>43fa8474-8597-445a-9643-b4a0360035d2</td:uuid>
  <td:label>Welcome</td:label>
  <title type="text">Welcome to the wiki</title>
  <summary type="text">Start here</summary>
  <published>2017-03-01T10:00:00.000Z</published>
  <updated>2017-03-02T11:30:00.000Z</updated>
  <td:created>2017-03-01T10:00:00.000Z</td:created>
  <td:modified>2017-03-02T11:30:00.000Z</td:modified>
  <td:versionLabel>3</td:versionLabel>
  <td:versionUuid>0c2a5d1e-2f3b-4c4d-8e9f-0a1b2c3d4e5f</td:versionUuid>
  <td:totalMediaSize>2048</td:totalMediaSize>
  <td:visibility>public</td:visibility>
  <td:propagation>true</td:propagation>
  <author>
    <name>Jane Doe</name>
    <snx:userid>20000123</snx:userid>
    <snx:orgId>20000001</snx:orgId>
    <snx:orgName>Example Corp</snx:orgName>
    <email>jane@example.com</email>
    <snx:userState>active</snx:userState>
  </author>
  <content type="text/html" src="https://apps.example.com/wikis/oauth/api/wiki/{WIKI_LABEL}/page/{PAGE_LABEL}/media?convertTo=html"/>
  <link rel="self" href="https://apps.example.com/wikis/oauth/api/wiki/w/page/p/entry" type="application/atom+xml"/>
  <link rel="edit" href="https://apps.example.com/wikis/oauth/api/wiki/w/page/p/entry"/>
  <link rel="enclosure" href="https://apps.example.com/wikis/oauth/api/wiki/w/page/p/media" type="text/html"/>
  <link rel="x-unknown" href="https://apps.example.com/ignored"/>
  <snx:rank scheme="http://www.ibm.com/xmlns/prod/sn/hit">42</snx:rank>
  <snx:rank scheme="http://www.ibm.com/xmlns/prod/sn/recommendations">5</snx:rank>
  <snx:rank scheme="http://example.com/unknown">7</snx:rank>
</entry>
"""

PAGE_VERSION_ENTRY = f"""<?xml version="1.0" encoding="UTF-8"?>
<entry {NAMESPACES}>
  <id>urn:lsid:ibm.com:td:0c2a5d1e-2f3b-4c4d-8e9f-0a1b2c3d4e5f</id>
  <td:label>Welcome</td:label>
  <td:versionLabel>2</td:versionLabel>
  <td:documentUuid>43fa8474-8597-445a-9643-b4a0360035d2</td:documentUuid>
  <td:libraryId>9b1c2d3e-4f5a-6b7c-8d9e-0f1a2b3c4d5e</td:libraryId>
  <title type="text">Welcome to the wiki</title>
  <published>2017-03-01T10:00:00.000Z</published>
  <updated>2017-03-01T12:00:00.000Z</updated>
  <author>
    <name>Jane Doe</name>
    <snx:userid>20000123</snx:userid>
  </author>
  <td:modifier>
    <name>John Roe</name>
    <snx:userid>20000456</snx:userid>
    <snx:userState>inactive</snx:userState>
  </td:modifier>
  <content type="text/html" src="https://apps.example.com/wikis/oauth/api/wiki/w/page/p/version/v/media"/>
  <link rel="self" href="https://apps.example.com/wikis/oauth/api/wiki/w/page/p/version/v/entry"/>
  <link rel="related" href="https://apps.example.com/wikis/oauth/api/wiki/w/page/p/entry"/>
</entry>
"""

PAGE_COMMENTS_FEED = f"""<?xml version="1.0" encoding="UTF-8"?>
<feed {NAMESPACES}>
  <title type="text">Comments</title>
  <entry>
    <id>urn:lsid:ibm.com:td:11111111-2222-3333-4444-555555555555</id>
    <title type="text">Re: Welcome</title>
    <content type="text">Nice page!</content>
    <td:language>en</td:language>
    <td:deleteWithRecord>false</td:deleteWithRecord>
    <author>
      <name>Jane Doe</name>
      <td:guest>false</td:guest>
    </author>
    <link rel="self" href="https://apps.example.com/c1"/>
    <link rel="enclosure" href="https://apps.example.com/not-a-comment-link"/>
  </entry>
  <entry>
    <id>urn:lsid:ibm.com:td:66666666-7777-8888-9999-000000000000</id>
    <td:versionLabel>abc</td:versionLabel>
    <content type="text">Second</content>
  </entry>
</feed>
"""

PAGE_VERSIONS_FEED = f"""<?xml version="1.0" encoding="UTF-8"?>
<feed {NAMESPACES}>
  <entry>
    <id>urn:lsid:ibm.com:td:aaaaaaaa-bbbb-cccc-dddd-eeeeeeeeeeee</id>
    <td:versionLabel>2</td:versionLabel>
  </entry>
  <entry>
    <id>urn:lsid:ibm.com:td:ffffffff-bbbb-cccc-dddd-eeeeeeeeeeee</id>
    <td:versionLabel>1</td:versionLabel>
  </entry>
</feed>
"""

WIKIS_FEED = f"""<?xml version="1.0" encoding="UTF-8"?>
<feed {NAMESPACES}>
  <entry>
    <id>urn:lsid:ibm.com:td:{WIKI_LABEL}</id>
    <td:uuid>{WIKI_LABEL}</td:uuid>
    <td:label>Team Wiki</td:label>
    <title type="text">Team Wiki</title>
    <summary type="text">Everything about the team</summary>
    <link rel="self" href="https://apps.example.com/wikis/oauth/api/wiki/{WIKI_LABEL}/entry"/>
  </entry>
</feed>
"""

NAVIGATION_JSON = '[{"id": "p1", "title": "Welcome", "children": [{"id": "p2"}]}]'


@pytest.fixture  # type: ignore[misc]
def parser() -> ResponseParser:
    return ResponseParser()
