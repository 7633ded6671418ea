"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "MockTest Desk"

MODE_BUTTON_CATALOG: str = "Browse Tests"
MODE_BUTTON_IMPORT: str = "Import Test"
MODE_BUTTON_EXPORT: str = "Export Test"
MODE_BUTTON_HISTORY: str = "Attempt History"

CATALOG_SEARCH_PLACEHOLDER: str = "Search by title or description"
CATALOG_ALL_DIFFICULTIES: str = "All difficulties"
CATALOG_ALL_CATEGORIES: str = "All categories"
CATALOG_START_BUTTON: str = "Start Test"
CATALOG_DELETE_BUTTON: str = "Delete Test"
CATALOG_EMPTY_STATE: str = "No tests match the current filters."
CATALOG_NO_ATTEMPT: str = "Not attempted yet."

RUNNER_PREV_BUTTON: str = "Previous"
RUNNER_NEXT_BUTTON: str = "Next"
RUNNER_REVIEW_BUTTON: str = "Mark for Review"
RUNNER_UNREVIEW_BUTTON: str = "Unmark Review"
RUNNER_SUBMIT_BUTTON: str = "Submit Test"
RUNNER_PROGRESS_TEMPLATE: str = "Question {number} of {total} · {answered} answered · {review} marked"

RESULT_BACK_BUTTON: str = "Back to Tests"
RESULT_RETAKE_BUTTON: str = "Retake Test"

HISTORY_EMPTY_STATE: str = "No attempts yet. Finish a test to see it here."
HISTORY_COLUMNS: tuple[str, ...] = ("Test", "Completed", "Score", "Correct", "Accuracy", "Duration")

IMPORT_DIALOG_TITLE: str = "Select test file"
IMPORT_FILE_FILTER: str = "Test files (*.txt);;All files (*.*)"
EXPORT_DIALOG_TITLE: str = "Save test to file"
EXPORT_FILE_FILTER: str = "Test files (*.txt);;All files (*.*)"

TEST_NOT_FOUND_MESSAGE: str = "Test not found. It may have been deleted."
NO_TEST_SELECTED_MESSAGE: str = "Please select a test first."
TEST_IMPORTED_MESSAGE: str = "Imported '{title}' with {count} question(s)."
HISTORY_SAVE_FAILED_MESSAGE: str = "The attempt could not be written to disk. It is kept for this session only."
