# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Ensure project root importable
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


EXPORT_PAGE = """<!DOCTYPE html>
<html>
 <head><meta charset="utf-8"/><title>Exported Data</title></head>
 <body>
  <div class="page_wrap">
   <div class="page_header"><a class="content block_link" href="messages.html">Back</a></div>
   <div class="history">
    <a class="pagination block_link" href="messages2.html">Previous messages</a>
    <div class="message default clearfix" id="message1">
     <div class="body">
      <div class="from_name">Ivan 15.06.2021 12:30:00</div>
      <div class="text"><a href="https://example.com/a"> Example </a></div>
     </div>
    </div>
    <div class="message default clearfix joined" id="message2">
     <div class="body">
      <div class="text">Reply to <a href="#go_to_message1">this</a>
       and <a href="https://t.me/joinchat/abc">join</a></div>
     </div>
    </div>
    <div class="message default clearfix" id="message3">
     <div class="body">
      <div class="from_name">Maria</div>
      <div class="text"><a href="https://example.org/b">b</a><a>no href</a></div>
     </div>
    </div>
   </div>
  </div>
 </body>
</html>
"""


@pytest.fixture
def export_page():
    return EXPORT_PAGE
