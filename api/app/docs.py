"""HTML documentation page served on GET."""

import html

from app.auth import TOKEN_HEADER
from app.config import Settings

_EXAMPLE_FORM = html.escape(f"""<form id="relayForm" method="POST" action="YOUR_API_URL">
  <textarea name="content" required></textarea>
  <select name="msgtype">
    <option value="text">Text</option>
    <option value="markdown">Markdown</option>
  </select>
  <input type="text" name="mentioned_mobile_list" placeholder="@all">
  <button type="submit">Send</button>
</form>
<script>
  document.getElementById("relayForm").addEventListener("submit", async (e) => {{
    e.preventDefault();
    const response = await fetch(e.target.action, {{
      method: "POST",
      body: new FormData(e.target),
      headers: {{"{TOKEN_HEADER}": "YOUR_VERIFICATION_TOKEN"}},
    }});
    const result = await response.json();
    alert(result.success ? "Message sent" : "Sending failed: " + result.message);
  }});
</script>""")


def render_docs_page(settings: Settings) -> str:
    escape = html.escape
    title = escape(settings.app_name)
    default_type = escape(settings.default_msg_type)
    token_note = (
        "Required: this deployment has a verification token configured."
        if settings.verification_token
        else "Optional: no verification token is configured, every request is accepted."
    )

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{title} API</title>
  <style>
    body {{ margin:0; padding:32px; background:#f4f5f7; color:#222;
      font-family:-apple-system,BlinkMacSystemFont,'Segoe UI',Roboto,Helvetica,Arial,sans-serif; }}
    main {{ max-width:860px; margin:0 auto; background:#fff; border-radius:8px;
      padding:24px 32px; box-shadow:0 2px 8px rgba(0,0,0,0.08); }}
    h1 {{ font-size:24px; margin-top:0; }}
    h2 {{ font-size:18px; border-bottom:1px solid #eee; padding-bottom:6px; margin-top:28px; }}
    table {{ width:100%; border-collapse:collapse; font-size:14px; }}
    th, td {{ text-align:left; padding:8px 10px; border-bottom:1px solid #eee; vertical-align:top; }}
    code, pre {{ background:#f0f0f3; border-radius:4px; font-size:13px; }}
    code {{ padding:1px 5px; }}
    pre {{ padding:12px; overflow-x:auto; }}
  </style>
</head>
<body>
<main>
  <h1>{title}</h1>
  <p>Forward HTML form or JSON submissions to a WeCom group chat robot.
     Text and Markdown messages are supported.</p>

  <h2>Endpoint</h2>
  <pre>POST /</pre>
  <p>Accepted bodies: <code>application/json</code>,
     <code>application/x-www-form-urlencoded</code>, <code>multipart/form-data</code>.</p>

  <h2>Parameters</h2>
  <table>
    <tr><th>Name</th><th>Required</th><th>Description</th></tr>
    <tr><td><code>content</code></td><td>yes</td><td>Message text (or Markdown source)</td></tr>
    <tr><td><code>msgtype</code></td><td>no</td>
        <td><code>text</code> or <code>markdown</code>. Defaults to <code>{default_type}</code>.</td></tr>
    <tr><td><code>mentioned_list</code></td><td>no</td>
        <td>Comma-separated user ids to mention (<code>text</code> only). <code>@all</code> mentions everyone.</td></tr>
    <tr><td><code>mentioned_mobile_list</code></td><td>no</td>
        <td>Comma-separated phone numbers to mention (<code>text</code> only). <code>@all</code> mentions everyone.</td></tr>
  </table>

  <h2>Headers</h2>
  <table>
    <tr><th>Name</th><th>Description</th></tr>
    <tr><td><code>{TOKEN_HEADER}</code></td><td>{token_note}</td></tr>
  </table>

  <h2>Success response</h2>
  <pre>{{
  "success": true,
  "message": "Message delivered to the WeCom group",
  "data": {{"errcode": 0, "errmsg": "ok"}}
}}</pre>

  <h2>Error response</h2>
  <pre>{{
  "success": false,
  "message": "Error description",
  "error": {{"code": "ERROR_CODE", "details": "Detailed error information (if any)"}}
}}</pre>
  <table>
    <tr><th>Status</th><th>Code</th></tr>
    <tr><td>400</td><td><code>MISSING_PARAMS</code>, <code>INVALID_MSG_TYPE</code>, <code>INVALID_BODY</code></td></tr>
    <tr><td>403</td><td><code>INVALID_TOKEN</code></td></tr>
    <tr><td>413</td><td><code>PAYLOAD_TOO_LARGE</code></td></tr>
    <tr><td>415</td><td><code>UNSUPPORTED_CONTENT_TYPE</code></td></tr>
    <tr><td>500</td><td><code>WEBHOOK_NOT_CONFIGURED</code>, <code>UNKNOWN_ERROR</code></td></tr>
    <tr><td>502</td><td><code>WECHAT_API_ERROR</code></td></tr>
  </table>

  <h2>Example form</h2>
  <pre>{_EXAMPLE_FORM}</pre>
</main>
</body>
</html>"""
