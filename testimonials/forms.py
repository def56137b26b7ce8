from django import forms


class TestimonialForm(forms.Form):
    message = forms.CharField(
        label="Your experience",
        min_length=10,
        max_length=1000,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 4}),
    )
