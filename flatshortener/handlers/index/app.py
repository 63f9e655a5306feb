from flatshortener.handlers.context import HandlerContext
from flatshortener.types import HandlerEvent, HandlerResponse
from flatshortener.utils.helpers import guarantee_500_response
from flatshortener.utils.responses import response_html


INDEX_HTML = """<!DOCTYPE html>
<html>
  <head><title>URL Shortener</title></head>
  <body style="font-family: Arial, sans-serif; padding: 20px;">
    <h2>URL Shortener</h2>
    <form id="shorten" method="POST" action="/api/shorten">
      <input name="url" id="url" placeholder="https://example.com" style="width: 400px" required />
      <input name="customAlias" id="customAlias" placeholder="custom alias (optional)" />
      <button type="submit">Shorten</button>
    </form>
    <p id="result"></p>
    <script>
      document.getElementById('shorten').addEventListener('submit', async (e) => {
        e.preventDefault();
        const body = { url: document.getElementById('url').value };
        const customAlias = document.getElementById('customAlias').value;
        if (customAlias) body.customAlias = customAlias;

        const res = await fetch('/api/shorten', {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify(body),
        });
        const data = await res.json();
        const result = document.getElementById('result');
        if (res.ok) {
          result.innerHTML = 'Short URL: <a href="' + data.shortUrl + '">' + data.shortUrl + '</a>';
        } else {
          result.textContent = 'Error: ' + (data.message || 'unknown');
        }
      });
    </script>
  </body>
</html>
"""


@guarantee_500_response
def handler(event: HandlerEvent, context: HandlerContext) -> HandlerResponse:
    """Serve the HTML form for shortening URLs by hand."""
    return response_html(INDEX_HTML)
