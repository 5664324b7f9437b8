# clima edge: per-request advertisement + city forecast page for a cdn edge function
