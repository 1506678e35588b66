"""User-facing messages. Internal errors never reach the client verbatim."""

ITEM_REQUIRED_FIELDS = '金額、収支区分、項目名は必須です'
ITEM_INVALID_TYPE = '収支区分は「収入」または「支出」を選択してください'
ITEM_INVALID_AMOUNT = '金額は正の数値を入力してください'
ITEM_EVENT_TOO_LONG = '項目名は100文字以内で入力してください'
ITEM_NOT_FOUND = '項目が見つかりません'
ITEM_SAVE_FAILED = '登録に失敗しました'

FILTER_INVALID_TYPE = '収支区分の絞り込み条件が正しくありません'
FILTER_INVALID_DATE = '日付はYYYY-MM-DD形式で入力してください'

LOGIN_REQUIRED_FIELDS = 'メールアドレスとパスワードを入力してください'
LOGIN_INVALID_CREDENTIALS = 'メールアドレスまたはパスワードが正しくありません'
LOGIN_FAILED = 'ログインに失敗しました'

REGISTER_REQUIRED_FIELDS = 'すべての項目を入力してください'
REGISTER_PASSWORD_MISMATCH = 'パスワードが一致しません'
REGISTER_PASSWORD_TOO_SHORT = 'パスワードは6文字以上で入力してください'
REGISTER_EMAIL_TAKEN = 'このメールアドレスは既に登録されています'
REGISTER_FAILED = '登録に失敗しました'

SERVER_ERROR = 'サーバーエラーが発生しました'

ITEM_CREATED = '項目を登録しました'
ITEM_UPDATED = '項目を更新しました'
ITEM_DELETED = '項目を削除しました'
LOGGED_OUT = 'ログアウトしました'
