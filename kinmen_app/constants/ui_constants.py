"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "Kinmen Course Player"
STUDENT_URL_PLACEHOLDER: str = "http://<teacher-ip>:8000/"

PREV_SLIDE_BUTTON: str = "Previous Slide"
NEXT_SLIDE_BUTTON: str = "Next Slide"
CHECK_MATCHING_BUTTON: str = "檢查答案"
RESET_MATCHING_BUTTON: str = "重新開始"

SLIDE_COUNTER_TEMPLATE: str = "Slide {current} / {total}"
RESULT_MESSAGE_TEMPLATE: str = "答對 {correct} / {total} 題！"
RESULT_PERFECT_SUFFIX: str = " 太棒了！"

COURSE_LOAD_ERROR_TITLE: str = "Course could not be loaded"
MATCHING_SETUP_ERROR_TITLE: str = "Matching game unavailable"
