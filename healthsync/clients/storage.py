import os
from datetime import datetime

from werkzeug.utils import secure_filename


def allowed_file(filename, allowed_extensions):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in allowed_extensions


class LocalStorage:
    """Saves uploaded images below UPLOAD_FOLDER and returns their public URL."""

    def __init__(self, upload_folder, url_prefix):
        self.upload_folder = upload_folder
        self.url_prefix = url_prefix.rstrip("/")

    @classmethod
    def from_config(cls, config, root_path):
        folder = config.get("UPLOAD_FOLDER")
        if not os.path.isabs(folder):
            folder = os.path.join(root_path, folder)
        return cls(folder, config.get("UPLOAD_URL_PREFIX", "/static/uploads"))

    def save(self, file, folder, prefix):
        filename = secure_filename(f"{prefix}_{datetime.utcnow().timestamp()}_{file.filename}")
        target_dir = os.path.join(self.upload_folder, folder)
        os.makedirs(target_dir, exist_ok=True)
        file.save(os.path.join(target_dir, filename))
        return f"{self.url_prefix}/{folder}/{filename}"

    def delete(self, url):
        if not url or not url.startswith(self.url_prefix + "/"):
            return False
        relative = url[len(self.url_prefix) + 1:]
        path = os.path.join(self.upload_folder, *relative.split("/"))
        if os.path.exists(path):
            os.remove(path)
            return True
        return False
