"""
Shared fixtures for flickr test suite.
"""

from unittest.mock import MagicMock

import pytest

from flickr.client import FlickrClient


# ── Credential fixtures ──────────────────────────────────────

@pytest.fixture
def api_key():
    return "87337fd784"


@pytest.fixture
def secret():
    return "sf97838dijd"


@pytest.fixture
def auth_token():
    return "ase878723623"


# ── Transport fixtures ───────────────────────────────────────

@pytest.fixture
def transport():
    """Transport double; set fetch/send return_value per test."""
    return MagicMock(spec=["fetch", "send"])


@pytest.fixture
def client(api_key, secret, transport):
    return FlickrClient(api_key, secret, transport)


@pytest.fixture
def authed_client(api_key, secret, transport, auth_token):
    return FlickrClient(api_key, secret, transport, auth_token=auth_token)


# ── Response bodies ──────────────────────────────────────────

@pytest.fixture
def fail_missing_signature():
    return b"""<?xml version="1.0" encoding="utf-8"?>
    <rsp stat="fail">
      <err code="97" msg="Missing signature"/>
    </rsp>"""


@pytest.fixture
def fail_filetype():
    return b"""<?xml version="1.0" encoding="utf-8"?>
    <rsp stat="fail">
      <err code="5" msg="Filetype was not recognised"/>
    </rsp>"""


@pytest.fixture
def token_response():
    return b"""<?xml version="1.0" encoding="utf-8"?>
    <rsp stat="ok">
      <auth>
        <token>121-84669832774</token>
        <perms>write</perms>
        <user nsid="7687633@N01" username="testuser" fullname="Test User"/>
      </auth>
    </rsp>"""


@pytest.fixture
def frob_response():
    return b"""<?xml version="1.0" encoding="utf-8"?>
    <rsp stat="ok">
      <frob>746563215463214621</frob>
    </rsp>"""


@pytest.fixture
def upload_response():
    return b"""<?xml version="1.0" encoding="utf-8"?>
    <rsp stat="ok">
      <ticketid>363</ticketid>
    </rsp>"""


@pytest.fixture
def search_response():
    return b"""<?xml version="1.0" encoding="utf-8"?>
    <rsp stat="ok">
      <photos page="1" pages="3" perpage="2" total="5">
        <photo id="1234" owner="22@N01" secret="63562" server="3" farm="1"
               title="kitten" ispublic="0" isfriend="1" isfamily="1"
               width_t="100" height_t="100"/>
        <photo id="5678" owner="22@N01" secret="36221" server="32" farm="4"
               title="puppies" ispublic="1" isfriend="0" isfamily="0"
               width_t="120" height_t="100"/>
      </photos>
    </rsp>"""


@pytest.fixture
def info_response():
    return b"""<rsp stat="ok">
<photo id="2733" secret="123456" server="12" isfavorite="0" license="3" rotation="90" originalsecret="1bc09ce34a" originalformat="png">
  <owner nsid="12037949754@N01" username="Bees" realname="Cal Henderson" location="Bedford, UK" />
  <title>orford_castle_taster</title>
  <description>hello!</description>
  <visibility ispublic="1" isfriend="0" isfamily="0" />
  <dates posted="1100897479" taken="2004-11-19 12:51:19" takengranularity="0" lastupdate="1093022469" />
  <permissions permcomment="3" permaddmeta="2" />
  <editability cancomment="1" canaddmeta="1" />
  <comments>1</comments>
  <notes>
    <note id="313" author="12037949754@N01" authorname="Bees" x="10" y="10" w="50" h="50">foo</note>
  </notes>
  <tags>
    <tag id="1234" author="12037949754@N01" raw="woo yay">wooyay</tag>
    <tag id="1235" author="12037949754@N01" raw="hoopla">hoopla</tag>
  </tags>
  <urls>
    <url type="photopage">http://www.flickr.com/photos/bees/2733/</url>
  </urls>
</photo>
</rsp>"""


@pytest.fixture
def sizes_response():
    return b"""<rsp stat="ok">
  <sizes canblog="0" canprint="1" candownload="1">
    <size label="Square" width="75" height="75" source="http://farm2.staticflickr.com/1103/567229075_2cf8456f01_s.jpg" url="http://www.flickr.com/photos/stewart/567229075/sizes/sq/" media="photo" />
    <size label="Large Square" width="150" height="150" source="http://farm2.staticflickr.com/1103/567229075_2cf8456f01_q.jpg" url="http://www.flickr.com/photos/stewart/567229075/sizes/q/" media="photo" />
    <size label="Thumbnail" width="100" height="75" source="http://farm2.staticflickr.com/1103/567229075_2cf8456f01_t.jpg" url="http://www.flickr.com/photos/stewart/567229075/sizes/t/" media="photo" />
    <size label="Small" width="240" height="180" source="http://farm2.staticflickr.com/1103/567229075_2cf8456f01_m.jpg" url="http://www.flickr.com/photos/stewart/567229075/sizes/s/" media="photo" />
    <size label="Small 320" width="320" height="240" source="http://farm2.staticflickr.com/1103/567229075_2cf8456f01_n.jpg" url="http://www.flickr.com/photos/stewart/567229075/sizes/n/" media="photo" />
    <size label="Medium" width="500" height="375" source="http://farm2.staticflickr.com/1103/567229075_2cf8456f01.jpg" url="http://www.flickr.com/photos/stewart/567229075/sizes/m/" media="photo" />
    <size label="Medium 640" width="640" height="480" source="http://farm2.staticflickr.com/1103/567229075_2cf8456f01_z.jpg?zz=1" url="http://www.flickr.com/photos/stewart/567229075/sizes/z/" media="photo" />
    <size label="Medium 800" width="800" height="600" source="http://farm2.staticflickr.com/1103/567229075_2cf8456f01_c.jpg" url="http://www.flickr.com/photos/stewart/567229075/sizes/c/" media="photo" />
    <size label="Large" width="1024" height="768" source="http://farm2.staticflickr.com/1103/567229075_2cf8456f01_b.jpg" url="http://www.flickr.com/photos/stewart/567229075/sizes/l/" media="photo" />
    <size label="Original" width="2400" height="1800" source="http://farm2.staticflickr.com/1103/567229075_6dc09dc6da_o.jpg" url="http://www.flickr.com/photos/stewart/567229075/sizes/o/" media="photo" />
  </sizes>
</rsp>"""


@pytest.fixture
def tickets_response():
    return b"""<?xml version="1.0" encoding="utf-8"?>
    <rsp stat="ok">
      <uploader>
        <ticket id="12345" complete="0"/>
        <ticket id="56789" complete="1" photoid="232323"/>
        <ticket id="333" invalid="1"/>
      </uploader>
    </rsp>"""


@pytest.fixture
def photosets_response():
    return b"""<?xml version="1.0" encoding="utf-8"?>
    <rsp stat="ok">
      <photosets cancreate="1">
        <photoset id="12345" photos="35" videos="0">
          <title>Flowers</title>
          <description>All my flower pictures</description>
        </photoset>
        <photoset id="65656" photos="112" videos="32">
          <title>Sophie</title>
          <description>Photos and videos of Sophie</description>
        </photoset>
      </photosets>
    </rsp>"""
