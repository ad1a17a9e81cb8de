import os
import traceback

from flask import Flask, jsonify, request, send_from_directory, url_for
from flask_cors import CORS
from werkzeug.utils import secure_filename

from .container import compress, decompress, read_container_info
from .errors import CodecError
from .history import COMPRESSED_EXTENSION, TextHistoryLog

# -----------------------------------------------------------
# PATH CONFIGURATION
# -----------------------------------------------------------
DEFAULT_DATA_DIR = os.path.join(os.path.abspath(os.getcwd()), "data")
MAX_UPLOAD_BYTES = 64 * 1024 * 1024


def create_app(data_dir=None):
    data_dir = data_dir or os.environ.get("FILEZIPPER_DATA_DIR", DEFAULT_DATA_DIR)
    upload_dir = os.path.join(data_dir, "uploads")
    output_dir = os.path.join(data_dir, "output")
    os.makedirs(upload_dir, exist_ok=True)
    os.makedirs(output_dir, exist_ok=True)

    # -----------------------------------------------------------
    # FLASK APP SETUP
    # -----------------------------------------------------------
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = MAX_UPLOAD_BYTES
    app.config["UPLOAD_DIR"] = upload_dir
    app.config["OUTPUT_DIR"] = output_dir
    CORS(app)

    history = TextHistoryLog(os.path.join(data_dir, "history.txt"))

    # -----------------------------------------------------------
    # HELPER FUNCTIONS
    # -----------------------------------------------------------
    def save_upload(file):
        filename = secure_filename(file.filename or "")
        if not filename:
            return None, None
        input_path = os.path.join(upload_dir, filename)
        file.save(input_path)
        return filename, input_path

    def codec_failure(result):
        print(f"❌ {result.operation} failed for {result.source}: {result.error}: {result.reason}")
        return jsonify({"success": False, "error": result.error, "reason": result.reason}), 422

    # -----------------------------------------------------------
    # ROUTES
    # -----------------------------------------------------------
    @app.route("/compress_file", methods=["POST"])
    def compress_file_route():
        try:
            file = request.files.get("file")
            if not file:
                return jsonify({"success": False, "error": "No file uploaded"}), 400

            filename, input_path = save_upload(file)
            if not filename:
                return jsonify({"success": False, "error": "Invalid file name"}), 400

            stem, _ = os.path.splitext(filename)
            compressed_filename = stem + COMPRESSED_EXTENSION
            compressed_path = os.path.join(output_dir, compressed_filename)

            result = compress(input_path, compressed_path, history=history)
            if not result:
                return codec_failure(result)

            print(f"✅ Compressed '{filename}' → '{compressed_filename}'")
            return jsonify({
                "success": True,
                "filename": filename,
                "compressed_filename": compressed_filename,
                "original_size": result.original_size,
                "compressed_size": result.compressed_size,
                "saved": result.saved,
                "saved_percent": result.saved_percent,
                "download_url": url_for("download", filename=compressed_filename),
            })

        except Exception as e:
            print("Error in /compress_file:", e)
            traceback.print_exc()
            return jsonify({"success": False, "error": "Internal server error"}), 500

    @app.route("/decompress_file", methods=["POST"])
    def decompress_file_route():
        try:
            file = request.files.get("file")
            if not file:
                return jsonify({"success": False, "error": "No file uploaded"}), 400

            filename = secure_filename(file.filename or "")
            if not filename.endswith(COMPRESSED_EXTENSION):
                return jsonify({"success": False, "error": "Invalid file type"}), 400
            _, input_path = save_upload(file)

            # The container remembers the original extension
            try:
                extension = read_container_info(input_path).extension
            except CodecError as e:
                return jsonify({"success": False, "error": e.kind, "reason": str(e)}), 422

            base_name = filename[:-len(COMPRESSED_EXTENSION)]
            output_filename = secure_filename(base_name + extension) or base_name
            output_path = os.path.join(output_dir, output_filename)

            result = decompress(input_path, output_path, history=history)
            if not result:
                return codec_failure(result)

            print(f"✅ Decompressed '{filename}' → '{output_filename}'")
            return jsonify({
                "success": True,
                "original_huff": filename,
                "decompressed_file": output_filename,
                "restored_size": result.original_size,
                "download_url": url_for("download", filename=output_filename),
            })

        except Exception as e:
            print("Error in /decompress_file:", e)
            traceback.print_exc()
            return jsonify({"success": False, "error": "Internal server error"}), 500

    @app.route("/download/<filename>")
    def download(filename):
        filename = secure_filename(filename)
        if not os.path.exists(os.path.join(output_dir, filename)):
            return "File not found", 404
        return send_from_directory(output_dir, filename, as_attachment=True,
                                   mimetype="application/octet-stream")

    @app.route("/history")
    def show_history():
        return jsonify({"entries": history.read_lines()})

    return app


# -----------------------------------------------------------
if __name__ == "__main__":
    create_app().run(debug=True)
