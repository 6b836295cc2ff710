"""The editor page. Lists are rendered server side; buttons call the JSON API and reload."""
from html import escape
from string import Template

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from notes_api.adapters.base import EditorAdapter
from notes_api.config.settings import Settings
from notes_api.dependencies import get_app_settings, get_editor, get_theme
from notes_api.formatting import format_date, format_file_size
from notes_api.schemas import FileItem, Message
from notes_api.theme import ThemeToggle

router = APIRouter()

PAGE = Template("""<!DOCTYPE html>
<html lang="en" class="$marker">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>$title</title>
<style>
  body { font-family: Inter, system-ui, sans-serif; margin: 0; padding: 2rem; background: #f8fafc; color: #334155; }
  .dark body { background: #0f172a; color: #e2e8f0; }
  main { max-width: 56rem; margin: 0 auto; }
  header { display: flex; justify-content: space-between; align-items: center; }
  textarea { width: 100%; height: 10rem; box-sizing: border-box; padding: 1rem; border-radius: .75rem; }
  .actions { display: flex; flex-wrap: wrap; gap: .75rem; margin-top: 1rem; }
  .card { border: 1px solid #e2e8f0; border-radius: .75rem; padding: 1rem; margin-bottom: .75rem; }
  .dark .card { border-color: #334155; }
  .files { display: grid; gap: .75rem; grid-template-columns: repeat(auto-fill, minmax(16rem, 1fr)); }
  .meta { font-size: .75rem; color: #94a3b8; }
  .content { white-space: pre-wrap; word-break: break-word; }
  #upload-input { display: none; }
</style>
</head>
<body>
<main>
  <header>
    <h1>$title</h1>
    <button onclick="toggleTheme()" aria-label="Toggle theme">$theme_label</button>
  </header>
  <section class="card">
    <textarea id="text" placeholder="Type a message..."></textarea>
    <div class="actions">
      <button onclick="resetText()">Reset</button>
      <button onclick="saveMessage()">Save</button>
      <button onclick="deleteAllMessages()" $messages_disabled>Delete All</button>
      <label><span role="button">Upload</span>
        <input id="upload-input" type="file" multiple onchange="uploadFiles(this.files)">
      </label>
      <button onclick="deleteAllFiles()" $files_disabled>Delete All Files</button>
    </div>
  </section>
  <section>
    <h2>Saved messages</h2>
    $messages
  </section>
  <section>
    <h2>Uploaded files</h2>
    <p id="progress" hidden>Processing...</p>
    <div class="files">$files</div>
  </section>
</main>
<script>
async function call(method, url, options) {
  const response = await fetch(url, Object.assign({method: method}, options || {}));
  return response.json();
}
function resetText() { document.getElementById("text").value = ""; }
async function saveMessage() {
  const text = document.getElementById("text").value;
  if (!text.trim()) return;
  const data = await call("POST", "/v1/messages", {
    headers: {"Content-Type": "application/json"},
    body: JSON.stringify({content: text})
  });
  if (data.saved) location.reload();
}
async function deleteMessage(id) { await call("DELETE", "/v1/messages/" + encodeURIComponent(id)); location.reload(); }
async function deleteAllMessages() {
  if (!window.confirm("Delete all messages?")) return;
  await call("DELETE", "/v1/messages?confirm=true"); location.reload();
}
async function uploadFiles(fileList) {
  if (!fileList || fileList.length === 0) return;
  const form = new FormData();
  for (const file of fileList) form.append("files", file);
  document.getElementById("progress").hidden = false;
  await call("POST", "/v1/files", {body: form});
  location.reload();
}
function downloadFile(id) { window.open("/v1/files/" + encodeURIComponent(id) + "/download", "_blank"); }
async function deleteFile(id) { await call("DELETE", "/v1/files/" + encodeURIComponent(id)); location.reload(); }
async function deleteAllFiles() {
  if (!window.confirm("Delete all files?")) return;
  await call("DELETE", "/v1/files?confirm=true"); location.reload();
}
async function toggleTheme() {
  const data = await call("POST", "/v1/theme/toggle");
  document.documentElement.classList.toggle("dark", data.is_dark);
  location.reload();
}
</script>
</body>
</html>
""")


def render_message(message: Message, locale: str) -> str:
    return (
        '<div class="card">'
        f'<p class="content">{escape(message.content)}</p>'
        f'<p class="meta">{escape(format_date(message.created_at, locale))}</p>'
        f'<button data-id="{escape(message.id)}" onclick="deleteMessage(this.dataset.id)" aria-label="Delete message">&times;</button>'
        '</div>'
    )


def render_file(file: FileItem, locale: str) -> str:
    details = f"{format_file_size(file.size)} &bull; {escape(format_date(file.created_at, locale))}"
    return (
        '<div class="card">'
        f'<p>{escape(file.name)}</p>'
        f'<p class="meta">{details}</p>'
        f'<button data-id="{escape(file.id)}" onclick="downloadFile(this.dataset.id)" aria-label="Download file">&darr;</button>'
        f'<button data-id="{escape(file.id)}" onclick="deleteFile(this.dataset.id)" aria-label="Delete file">&times;</button>'
        '</div>'
    )


def render_page(editor: EditorAdapter, theme: ThemeToggle, settings: Settings) -> str:
    locale = settings.date_locale
    if editor.messages:
        messages = "\n".join(render_message(m, locale) for m in editor.messages)
    else:
        messages = '<div class="card"><p class="meta">No saved messages</p></div>'
    if editor.files:
        files = "\n".join(render_file(f, locale) for f in editor.files)
    else:
        files = '<div class="card"><p class="meta">No uploaded files</p></div>'

    return PAGE.substitute(
        title=escape(settings.app_name),
        marker=theme.marker,
        theme_label="Light" if theme.is_dark else "Dark",
        messages=messages,
        files=files,
        messages_disabled="" if editor.messages else "disabled",
        files_disabled="" if editor.files else "disabled",
    )


@router.get("/", response_class=HTMLResponse)
async def editor_page(
    editor: EditorAdapter = Depends(get_editor),
    theme: ThemeToggle = Depends(get_theme),
    settings: Settings = Depends(get_app_settings),
):
    return HTMLResponse(render_page(editor, theme, settings))
