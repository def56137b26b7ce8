from django import forms

from users.models import SUBJECTS
from .matching import MatchFilter
from .zones import district_choices, province_choices, zone_choices


class MatchFilterForm(forms.Form):
    """
    GET form on the match finder. Options for district and zone follow the
    selected province and district.
    """
    subject = forms.ChoiceField(required=False)
    province = forms.ChoiceField(required=False)
    district = forms.ChoiceField(required=False)
    zone = forms.ChoiceField(required=False)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.match_filter = MatchFilter.from_params(self.data)

        self.fields['subject'].choices = [('', 'All Subjects')] + [(s, s) for s in SUBJECTS]
        self.fields['province'].choices = [('', 'All Provinces')] + province_choices()
        self.fields['district'].choices = [('', 'All Districts')] + district_choices(self.match_filter.province)
        self.fields['zone'].choices = [('', 'All Zones')] + zone_choices(
            self.match_filter.province, self.match_filter.district
        )

        self.initial.update(self.match_filter.as_params())
        if not self.match_filter.province:
            self.fields['district'].widget.attrs['disabled'] = True
        if not self.match_filter.district:
            self.fields['zone'].widget.attrs['disabled'] = True

        for field in self.fields.values():
            field.widget.attrs.setdefault('class', 'form-select')

    def to_filter(self):
        """The MatchFilter described by the submitted parameters."""
        return self.match_filter
