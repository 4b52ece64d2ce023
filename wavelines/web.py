"""
Wavelines - web front end
Run: python -m wavelines serve
Opens a browser on http://localhost:5000
"""
from __future__ import annotations

import base64
import logging
import threading
import time
import webbrowser

from flask import Flask, jsonify, render_template_string, request

from .canvas import WaveCanvas

logger = logging.getLogger(__name__)

HTML_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Wavelines</title>
    <style>
        * { box-sizing: border-box; margin: 0; padding: 0; }

        body {
            font-family: 'Helvetica Neue', Arial, sans-serif;
            background: #0b0b0b;
            color: #fff;
        }

        #waveImage {
            position: fixed;
            top: 0;
            left: 24px;
            width: 100px;
            height: 100vh;
            pointer-events: none;
        }

        main {
            margin-left: 160px;
            max-width: 640px;
            padding: 40px 20px;
        }

        section {
            min-height: 70vh;
            border-bottom: 1px solid #222;
            padding: 40px 0;
        }
    </style>
</head>
<body>
    <img id="waveImage" alt="">
    <main>
        {% for i in range(sections) %}
        <section><h2>Section {{ i + 1 }}</h2><p>Scroll to move the waves.</p></section>
        {% endfor %}
    </main>
    <script>
        function documentHeights() {
            return [
                document.body.scrollHeight,
                document.body.offsetHeight,
                document.documentElement.clientHeight,
                document.documentElement.scrollHeight,
                document.documentElement.offsetHeight,
            ];
        }

        function send(event) {
            fetch('/event', {
                method: 'POST',
                headers: { 'Content-Type': 'application/json' },
                body: JSON.stringify(event),
            });
        }

        function onResize() {
            send({ type: 'resize', height: window.innerHeight, document_heights: documentHeights() });
        }

        window.addEventListener('resize', onResize);
        window.addEventListener('scroll', () => {
            send({ type: 'scroll', offset: window.scrollY || window.pageYOffset, document_heights: documentHeights() });
        });
        window.addEventListener('wheel', (e) => send({ type: 'wheel', dx: e.deltaX, dy: e.deltaY }));

        const img = document.getElementById('waveImage');
        let busy = false;
        async function poll() {
            if (!busy) {
                busy = true;
                try {
                    const response = await fetch('/frame');
                    const result = await response.json();
                    if (result.success) {
                        img.src = 'data:image/png;base64,' + result.image_data;
                    }
                } finally {
                    busy = false;
                }
            }
            setTimeout(poll, 33);
        }

        onResize();
        poll();
    </script>
</body>
</html>
"""


def create_app(canvas: WaveCanvas | None = None, clock=time.monotonic) -> Flask:
    app = Flask(__name__)
    canvas = canvas or WaveCanvas()
    lock = threading.Lock()
    epoch = clock() - canvas.host.now
    canvas.start()
    app.extensions["wavelines"] = canvas

    @app.route("/")
    def index():
        return render_template_string(HTML_TEMPLATE, sections=6)

    @app.route("/event", methods=["POST"])
    def event():
        try:
            data = request.get_json(force=True, silent=True)
            if not isinstance(data, dict):
                raise ValueError("expected a JSON object")
            with lock:
                canvas.adapter.handle(data)
                phase = canvas.driver.phase.value
            return jsonify({"success": True, "phase": phase})
        except Exception as e:
            logger.warning("Event error: %s", e)
            return jsonify({"success": False, "error": str(e)}), 400

    @app.route("/frame")
    def frame():
        with lock:
            canvas.host.advance_to(clock() - epoch)
            state = canvas.driver.state
            img_base64 = base64.b64encode(canvas.frame_png()).decode()
            return jsonify(
                {
                    "success": True,
                    "image_data": img_base64,
                    "phase": canvas.driver.phase.value,
                    "time": state.time,
                    "frames": canvas.frames_rendered,
                }
            )

    return app


def open_browser(url: str) -> None:
    webbrowser.open(url)


def serve(host: str = "127.0.0.1", port: int = 5000, browser: bool = True) -> None:
    app = create_app()
    url = f"http://{'localhost' if host in ('127.0.0.1', '0.0.0.0') else host}:{port}"
    logger.info("Serving wavelines on %s", url)
    if browser:
        threading.Timer(1.5, open_browser, args=(url,)).start()
    app.run(host=host, port=port, debug=False, threaded=False)
