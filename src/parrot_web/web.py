from __future__ import annotations
import argparse
import sys
import threading
from flask import Flask, request, jsonify, Response
from parrot.engine import Engine
from parrot.errors import DictionaryError
from parrot import config as CFG

app = Flask(__name__)
_engine: Engine | None = None
# the dev server may handle requests on several threads; the engine is single-owner
_lock = threading.Lock()

def _get_engine() -> Engine:
    if _engine is None:
        raise RuntimeError("Engine not initialized")
    return _engine

def _line_from_json():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    line = data.get("line")
    if not isinstance(line, str) or not line.strip():
        return None
    return line

# ---------- API ----------
@app.get("/health")
def health():
    with _lock:
        stats = _get_engine().stats()
    return jsonify({"ok": True, "sentences": stats["sentences"], "words": stats["words"]})

@app.get("/api/respond")
def api_respond():
    q = request.args.get("q", "", type=str)
    if not q.strip():
        return jsonify({"error": "missing query parameter 'q'"}), 400
    with _lock:
        reply = _get_engine().respond_to(q)
    return jsonify({"response": reply})

@app.post("/api/learn")
def api_learn():
    line = _line_from_json()
    if line is None:
        return jsonify({"error": "body must be JSON with a non-empty 'line'"}), 400
    with _lock:
        learned = _get_engine().learn(line)
    return jsonify({"learned": learned})

@app.post("/api/chat")
def api_chat():
    line = _line_from_json()
    if line is None:
        return jsonify({"error": "body must be JSON with a non-empty 'line'"}), 400
    with _lock:
        eng = _get_engine()
        reply = eng.respond_to(line)
        learned = eng.learn(line)
    return jsonify({"response": reply, "learned": learned})

@app.errorhandler(DictionaryError)
def dictionary_error(e: DictionaryError):
    return jsonify({"error": str(e)}), 500

# ---------- UI ----------
@app.get("/")
def home():
    # A tiny chat page: CSS variables + minimal JS, no external deps.
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>Parrot • Chat</title>
<style>
:root{
  --bg:#0b0f14; --panel:#0f141b; --ink:#cfd8e3; --muted:#8a94a6;
  --accent:#6ee7ff; --border:#1c2530;
}
*{box-sizing:border-box}
body{
  margin:0; background:var(--bg); color:var(--ink);
  font:16px/1.45 system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,"Helvetica Neue",Arial;
}
.container{ max-width:760px; margin:24px auto; padding:0 16px }
.card{ background:var(--panel); border:1px solid var(--border); border-radius:16px; padding:18px }
h1{ font-size:20px; margin:0 0 8px 0 }
#log{ min-height:240px; max-height:60vh; overflow:auto; border:1px solid var(--border); border-radius:12px; padding:12px }
.msg{ margin:6px 0 } .you{ color:var(--accent) } .bot{ color:var(--ink) } .none{ color:var(--muted); font-style:italic }
form{ display:flex; gap:12px; margin-top:12px }
input{ flex:1; padding:12px 14px; border-radius:12px; border:1px solid var(--border); background:#0b1117; color:var(--ink); font-size:16px }
button{ padding:10px 14px; border-radius:10px; border:1px solid var(--border); background:#0b1117; color:var(--ink); cursor:pointer }
#stats{ color:var(--muted); font-size:13px; margin-top:6px }
</style>
</head>
<body>
  <div class="container">
    <div class="card">
      <h1>Parrot</h1>
      <div id="log"></div>
      <form id="chat">
        <input id="line" type="text" placeholder="Say something…" autocomplete="off" autofocus />
        <button type="submit">Send</button>
      </form>
      <div id="stats">Ready.</div>
    </div>
  </div>
<script>
const $ = (sel) => document.querySelector(sel);
const log = $("#log"), line = $("#line"), stats = $("#stats");
function add(cls, text){
  const div = document.createElement("div");
  div.className = "msg " + cls;
  div.textContent = text;
  log.appendChild(div);
  log.scrollTop = log.scrollHeight;
}
$("#chat").addEventListener("submit", async (ev)=>{
  ev.preventDefault();
  const text = line.value.trim();
  if(!text) return;
  line.value = "";
  add("you", "> " + text);
  try{
    const resp = await fetch("/api/chat", {
      method:"POST", headers:{"Content-Type":"application/json"},
      body: JSON.stringify({line:text})
    });
    if(!resp.ok) throw new Error(`HTTP ${resp.status}`);
    const data = await resp.json();
    if(data.response === null) add("none", "(no response)");
    else add("bot", data.response);
    stats.textContent = data.learned ? "Learned something new." : "Nothing new learned.";
  }catch(e){
    stats.textContent = `Error: ${e.message ?? e}`;
  }
});
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run the Flask chat UI on top of Engine")
    ap.add_argument("--dict", default=CFG.DICTIONARY_PATH)
    ap.add_argument("--rebuild", action="store_true")
    ap.add_argument("--no-learn", action="store_true")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    global _engine
    _engine = Engine(learn=not args.no_learn)
    try:
        _engine.load(args.dict, rebuild=True if args.rebuild else None, verbose=args.verbose)
    except DictionaryError as e:
        print(f"error: {e}", file=sys.stderr)
        _engine = None
        return 1

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.shutdown()
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
