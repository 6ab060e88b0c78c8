# Constants shared by the editing tools

# Lines of context shown around an edit
SNIPPET_LINES = 4

# Output limits for content returned to the model
MAX_RESPONSE_LEN = 16000
TRUNCATED_MESSAGE = (
    "<response clipped><NOTE>To save on context only part of this file has been shown to you. "
    "View a smaller file or edit in smaller steps.</NOTE>"
)

STR_REPLACE_EDITOR = "str_replace_editor"
FILE_MANAGER = "file_manager"
